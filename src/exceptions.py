"""Exception taxonomy for the LexAI chat client.

Attachment errors are raised per file by the codec layer and collected as
rejections by the attachment manager. Remote and request errors surface to the
chat session and the HTTP API.
"""


class LexAIError(Exception):
    """Base class for all chat client errors."""


class FileTooLarge(LexAIError):
    """Raised when a file's declared size exceeds the configured maximum."""

    def __init__(self, file_name: str, size: int, limit: int) -> None:
        self.file_name = file_name
        self.size = size
        self.limit = limit
        size_mb = size / (1024 * 1024)
        limit_mb = limit / (1024 * 1024)
        super().__init__(
            f'File "{file_name}" ({size_mb:.1f}MB) exceeds the {limit_mb:.0f}MB limit'
        )


class UnsupportedFileType(LexAIError):
    """Raised when a file is neither PDF, DOCX, TXT nor a spreadsheet."""

    def __init__(self, file_name: str, accepted: tuple[str, ...]) -> None:
        self.file_name = file_name
        self.accepted = accepted
        super().__init__(
            f"File {file_name} is not supported. "
            f"Please upload one of: {', '.join(accepted)}"
        )


class AttachmentProcessingError(LexAIError):
    """Raised when text extraction or encoding of a file fails."""

    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Failed to process {file_name}: {reason}")


class ExtractionError(Exception):
    """Raised by document extractors when a file cannot be read."""


class RemoteCallError(LexAIError):
    """Raised when the remote model call fails (network or service error)."""


class InvalidSendRequest(LexAIError):
    """Raised when a send is attempted while busy or with nothing to send."""
