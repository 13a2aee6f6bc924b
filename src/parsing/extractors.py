"""Document text extractors injected into the codec.

Word documents are read with python-docx. Workbooks are read with openpyxl
(XLSX) or xlrd (legacy XLS), picked from the file signature. Plain CSV text
declared as a spreadsheet is read as a single sheet. Every failure is
reported as ExtractionError.
"""

import csv
import io
import logging
from collections.abc import Iterable
from datetime import date, datetime

import openpyxl
import xlrd
from docx import Document

from src.exceptions import ExtractionError

logger = logging.getLogger(__name__)

ZIP_MAGIC_BYTES = b"PK\x03\x04"
OLE_MAGIC_BYTES = b"\xd0\xcf\x11\xe0"
DELIMITED_SHEET_NAME = "Sheet1"


def extract_docx_text(file_content: bytes) -> str:
    """Extract raw paragraph text from a DOCX document.

    Args:
        file_content: Raw bytes of the .docx file.

    Returns:
        Paragraph texts separated by blank lines.

    Raises:
        ExtractionError: If the document cannot be opened.
    """
    try:
        document = Document(io.BytesIO(file_content))
        return "\n\n".join(paragraph.text for paragraph in document.paragraphs)
    except Exception as e:
        raise ExtractionError(f"Unable to read DOCX document: {e}") from e


def _format_cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime | date):
        return value.isoformat()
    return str(value)


def _rows_to_csv(rows: Iterable[Iterable[object]]) -> str:
    """Render rows as comma-separated text, one line per row, no trailing newline.

    Rows with no values at all are skipped.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        cells = [_format_cell(value) for value in row]
        if any(cells):
            writer.writerow(cells)
    return buffer.getvalue().rstrip("\n")


def _parse_xlsx(file_content: bytes) -> list[tuple[str, str]]:
    workbook = openpyxl.load_workbook(
        io.BytesIO(file_content), read_only=True, data_only=True
    )
    try:
        return [
            (sheet.title, _rows_to_csv(sheet.iter_rows(values_only=True)))
            for sheet in workbook.worksheets
        ]
    finally:
        workbook.close()


def _xls_cell_value(cell: xlrd.sheet.Cell, datemode: int) -> object:
    # xlrd stores dates as serial day numbers
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    return cell.value


def _parse_xls(file_content: bytes) -> list[tuple[str, str]]:
    book = xlrd.open_workbook(file_contents=file_content)
    return [
        (
            sheet.name,
            _rows_to_csv(
                (_xls_cell_value(cell, book.datemode) for cell in sheet.row(i))
                for i in range(sheet.nrows)
            ),
        )
        for sheet in book.sheets()
    ]


def _parse_delimited(file_content: bytes) -> list[tuple[str, str]]:
    """Read plain CSV text, which browsers often declare as an Excel type."""
    text = file_content.decode("utf-8-sig")
    return [(DELIMITED_SHEET_NAME, _rows_to_csv(csv.reader(io.StringIO(text))))]


def _is_text(file_content: bytes) -> bool:
    try:
        file_content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return False
    return b"\x00" not in file_content


def parse_workbook(file_content: bytes) -> list[tuple[str, str]]:
    """Parse a workbook into (sheet name, CSV text) pairs in sheet order.

    Args:
        file_content: Raw bytes of an .xlsx, .xls or CSV file.

    Returns:
        One (name, delimited text) pair per sheet.

    Raises:
        ExtractionError: If the format is unknown or the workbook is unreadable.
    """
    if file_content.startswith(ZIP_MAGIC_BYTES):
        parser = _parse_xlsx
    elif file_content.startswith(OLE_MAGIC_BYTES):
        parser = _parse_xls
    elif _is_text(file_content):
        parser = _parse_delimited
    else:
        raise ExtractionError("Unrecognized spreadsheet format")

    try:
        sheets = parser(file_content)
    except Exception as e:
        raise ExtractionError(f"Unable to read workbook: {e}") from e

    logger.debug(f"Parsed workbook with {len(sheets)} sheet(s)")
    return sheets
