"""Codec layer for document attachments.

Turns picked files into payloads the model can read.

Responsibilities:
    - File classification by declared type with extension fallback
    - Size and type validation before any transform
    - Plain text passthrough, DOCX text extraction, spreadsheet rendering
    - PDF validation and base64 passthrough

Extractors are injected into the codec; `build_default_codec` wires the real
python-docx, openpyxl and xlrd based ones.
"""

from src.attachments.config import AttachmentConfig, get_attachment_config
from src.parsing.codec import DocumentCodec, decode_bytes, encode_bytes, render_workbook
from src.parsing.extractors import extract_docx_text, parse_workbook
from src.parsing.file_types import ACCEPTED_EXTENSIONS, classify_file


def build_default_codec(config: AttachmentConfig | None = None) -> DocumentCodec:
    """Create a codec wired with the real document extractors.

    Args:
        config: Optional attachment configuration.
                Loads from environment if not provided.

    Returns:
        Configured DocumentCodec.
    """
    config = config or get_attachment_config()
    return DocumentCodec(
        text_extractor=extract_docx_text,
        workbook_parser=parse_workbook,
        max_file_size=config.max_file_size,
    )


__all__ = [
    "ACCEPTED_EXTENSIONS",
    "DocumentCodec",
    "build_default_codec",
    "classify_file",
    "decode_bytes",
    "encode_bytes",
    "extract_docx_text",
    "parse_workbook",
    "render_workbook",
]
