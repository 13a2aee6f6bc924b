"""PDF validation using pypdf.

PDFs are sent to the model as inline binary, so nothing is extracted here.
The file is only checked to be a readable PDF before it is accepted.
"""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import DependencyError, PdfReadError

from src.exceptions import ExtractionError

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        ExtractionError: If the content is empty or lacks a PDF header.
    """
    if not file_content:
        raise ExtractionError("Empty file provided")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise ExtractionError("Invalid PDF: file does not start with PDF header")


def check_pdf(file_content: bytes) -> int | None:
    """Check that the bytes form a readable PDF.

    A PDF that pypdf cannot open only for lack of an optional backend (such as
    the AES support for restricted documents) is still accepted, since the
    file itself is passed through unchanged.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        Number of pages in the document, or None if the pages were not counted.

    Raises:
        ExtractionError: If the file is empty, not a PDF, corrupt, or has no pages.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e
    except DependencyError as e:
        logger.warning(f"Skipping PDF page check: {e}")
        return None
    except Exception as e:
        raise ExtractionError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise ExtractionError("PDF contains no pages")

    logger.debug(f"PDF check passed ({pages} pages)")
    return pages
