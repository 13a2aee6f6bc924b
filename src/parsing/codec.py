"""Per-file codec: validate, then extract text or encode bytes for transmission."""

import base64
import binascii
import logging
from collections.abc import Callable

from src.exceptions import (
    AttachmentProcessingError,
    ExtractionError,
    FileTooLarge,
    UnsupportedFileType,
)
from src.models.schemas import ContentKind, EncodedPayload, FileKind, RawFile
from src.parsing.file_types import ACCEPTED_EXTENSIONS, PDF_MIME, TEXT_MIME, classify_file
from src.parsing.pdf_parser import check_pdf

logger = logging.getLogger(__name__)

TextExtractor = Callable[[bytes], str]
WorkbookParser = Callable[[bytes], list[tuple[str, str]]]


def encode_bytes(data: bytes) -> str:
    """Encode raw bytes to portable base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode_bytes(data: str) -> bytes:
    """Decode portable base64 text back to the original bytes."""
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def render_workbook(sheets: list[tuple[str, str]]) -> str:
    """Concatenate sheets under a header line each, skipping empty sheets."""
    rendered = ""
    for name, table in sheets:
        if table and table.strip():
            rendered += f"--- Sheet: {name} ---\n{table}\n\n"
    return rendered


class DocumentCodec:
    """Turns a raw file into an encoded payload.

    Text extraction and workbook parsing are injected so the codec stays
    pure and testable. The codec never mutates shared state.
    """

    def __init__(
        self,
        text_extractor: TextExtractor,
        workbook_parser: WorkbookParser,
        max_file_size: int,
    ) -> None:
        self._text_extractor = text_extractor
        self._workbook_parser = workbook_parser
        self.max_file_size = max_file_size

    def validate(self, raw: RawFile) -> FileKind:
        """Apply the size check, then the type check.

        Raises:
            FileTooLarge: Declared size exceeds the maximum.
            UnsupportedFileType: Neither declared type nor extension is accepted.
        """
        if raw.size > self.max_file_size:
            raise FileTooLarge(raw.name, raw.size, self.max_file_size)

        kind = classify_file(raw.name, raw.media_type)
        if kind is FileKind.UNSUPPORTED:
            raise UnsupportedFileType(raw.name, ACCEPTED_EXTENSIONS)
        return kind

    def encode(self, raw: RawFile, kind: FileKind) -> EncodedPayload:
        """Transform a validated file into its transmission payload.

        Raises:
            AttachmentProcessingError: Extraction, parsing or decoding failed.
        """
        if kind is FileKind.TEXT:
            return self._embedded_text(self._decode_text(raw))
        if kind is FileKind.WORD_DOC:
            return self._embedded_text(self._extract(raw, self._text_extractor))
        if kind is FileKind.SPREADSHEET:
            sheets = self._extract(raw, self._workbook_parser)
            return self._embedded_text(render_workbook(sheets))
        if kind is FileKind.PDF:
            self._extract(raw, check_pdf)
            return EncodedPayload(
                data=encode_bytes(raw.data),
                mime_type=raw.media_type or PDF_MIME,
                kind=ContentKind.INLINE_BINARY,
            )
        raise UnsupportedFileType(raw.name, ACCEPTED_EXTENSIONS)

    def process(self, raw: RawFile) -> EncodedPayload:
        """Validate and encode in one step."""
        return self.encode(raw, self.validate(raw))

    @staticmethod
    def _embedded_text(text: str) -> EncodedPayload:
        return EncodedPayload(
            data=encode_bytes(text.encode("utf-8")),
            mime_type=TEXT_MIME,
            kind=ContentKind.EMBEDDED_TEXT,
        )

    @staticmethod
    def _decode_text(raw: RawFile) -> str:
        try:
            return raw.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AttachmentProcessingError(raw.name, "file is not valid UTF-8 text") from e

    @staticmethod
    def _extract(raw: RawFile, extractor: Callable[[bytes], object]):
        try:
            return extractor(raw.data)
        except ExtractionError as e:
            logger.warning(f"Extraction failed for {raw.name}: {e}")
            raise AttachmentProcessingError(raw.name, str(e)) from e
