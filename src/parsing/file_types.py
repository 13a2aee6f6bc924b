"""File classification by declared media type with extension fallback."""

from src.models.schemas import FileKind

PDF_MIME = "application/pdf"
TEXT_MIME = "text/plain"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLS_MIME = "application/vnd.ms-excel"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_MIME_KINDS: dict[str, FileKind] = {
    PDF_MIME: FileKind.PDF,
    TEXT_MIME: FileKind.TEXT,
    DOCX_MIME: FileKind.WORD_DOC,
    XLS_MIME: FileKind.SPREADSHEET,
    XLSX_MIME: FileKind.SPREADSHEET,
}

_EXTENSION_KINDS: dict[str, FileKind] = {
    ".pdf": FileKind.PDF,
    ".txt": FileKind.TEXT,
    ".docx": FileKind.WORD_DOC,
    ".xls": FileKind.SPREADSHEET,
    ".xlsx": FileKind.SPREADSHEET,
}

ACCEPTED_EXTENSIONS: tuple[str, ...] = tuple(_EXTENSION_KINDS)


def classify_file(name: str, media_type: str) -> FileKind:
    """Classify a file once from its declared type, falling back to its extension.

    Args:
        name: File name, used for the extension fallback.
        media_type: Declared media type, possibly empty or generic.

    Returns:
        The file kind, or FileKind.UNSUPPORTED.
    """
    kind = _MIME_KINDS.get(media_type.split(";")[0].strip().lower())
    if kind is not None:
        return kind

    lowered = name.lower()
    for extension, extension_kind in _EXTENSION_KINDS.items():
        if lowered.endswith(extension):
            return extension_kind

    return FileKind.UNSUPPORTED
