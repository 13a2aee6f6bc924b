"""Pydantic models shared by the core, the API and the UI."""

import base64
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class FileKind(str, Enum):
    """Closed classification of an uploaded file."""

    PDF = "pdf"
    TEXT = "text"
    WORD_DOC = "word_doc"
    SPREADSHEET = "spreadsheet"
    UNSUPPORTED = "unsupported"


class ContentKind(str, Enum):
    """How an attachment travels to the model."""

    INLINE_BINARY = "inline_binary"
    EMBEDDED_TEXT = "embedded_text"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatStatus(str, Enum):
    """Session-wide status. Exactly one value at a time."""

    IDLE = "idle"
    AWAITING_FIRST_TOKEN = "awaiting-first-token"
    RECEIVING = "receiving"
    FAILED = "failed"


class RawFile(BaseModel):
    """A file as picked by the user, before validation.

    Attributes:
        name: Original file name.
        media_type: Declared media type (may be empty).
        size: Declared size in bytes.
        data: Raw file content.
    """

    name: str
    media_type: str = ""
    size: int = Field(ge=0)
    data: bytes


class EncodedPayload(BaseModel):
    """Codec output ready for transmission.

    Attributes:
        data: Base64 text of the raw bytes (or of the UTF-8 extracted text).
        mime_type: Media type used when transmitting.
        kind: Whether the payload is sent as inline binary or embedded text.
    """

    data: str
    mime_type: str
    kind: ContentKind


class AttachmentSummary(BaseModel):
    """Attachment metadata without the payload, for listings."""

    id: str
    name: str
    media_type: str
    size: int
    mime_type: str
    kind: ContentKind
    delivered: bool


class Attachment(BaseModel):
    """A user-supplied file transformed into a transmittable payload.

    `delivered` only ever moves from False to True, via `mark_delivered`.
    """

    id: str
    name: str
    media_type: str
    size: int = Field(ge=0)
    data: str
    mime_type: str
    kind: ContentKind
    delivered: bool = False

    @property
    def text(self) -> str:
        """Decoded UTF-8 text of an embedded-text attachment."""
        return base64.b64decode(self.data).decode("utf-8")

    def mark_delivered(self) -> None:
        self.delivered = True

    def summary(self) -> AttachmentSummary:
        return AttachmentSummary.model_validate(self.model_dump(exclude={"data"}))


class Rejection(BaseModel):
    """A file that failed validation or processing during a batch submit."""

    file_name: str
    reason: str
    error: str


class SubmitResult(BaseModel):
    accepted: list[Attachment] = Field(default_factory=list)
    rejections: list[Rejection] = Field(default_factory=list)


class TranscriptEntry(BaseModel):
    """One turn in the visible conversation.

    Attributes:
        id: Unique entry identifier.
        role: Author of the turn.
        content: Message text. Empty string means nothing produced yet.
        created_at: Creation timestamp (UTC).
        in_progress: True while an assistant reply awaits its first token.
        attachments: Attachments delivered with a user turn.
    """

    id: str
    role: Role
    content: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    in_progress: bool = False
    attachments: list[Attachment] = Field(default_factory=list)


class TextPart(BaseModel):
    """Plain text message part."""

    text: str


class InlineDataPart(BaseModel):
    """Binary message part carried as base64 with its media type."""

    mime_type: str
    data: str


MessagePart = TextPart | InlineDataPart


class StreamChunk(BaseModel):
    """A streamed update of the assistant reply.

    Attributes:
        content: The complete reply text so far (cumulative, not a delta).
        done: Whether this is the final chunk.
        status: Session status after this update.
        error: Error message if the reply failed.
    """

    content: str
    done: bool
    status: ChatStatus
    error: str | None = None


class ChatRequest(BaseModel):
    """Request payload for the chat streaming endpoint.

    Attributes:
        message: User's question or prompt. May be empty when attachments
            are pending.
    """

    message: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class UploadResponse(BaseModel):
    """Result of a batch upload: accepted attachments and per-file rejections."""

    accepted: list[AttachmentSummary]
    rejections: list[Rejection]


class TranscriptEntryView(BaseModel):
    id: str
    role: Role
    content: str
    created_at: datetime
    in_progress: bool
    attachments: list[AttachmentSummary]


class SessionState(BaseModel):
    """Read-only snapshot of the chat session for presentation."""

    status: ChatStatus
    transcript: list[TranscriptEntryView]
    attachments: list[AttachmentSummary]
