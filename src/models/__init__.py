"""Pydantic models for the chat client and its API.

Provides type safety and validation for every value that crosses a
component boundary.

Models:
    - RawFile, EncodedPayload: codec input and output
    - Attachment: validated, encoded file with delivery state
    - TranscriptEntry: one user or assistant turn
    - TextPart, InlineDataPart: provider-neutral message parts
    - StreamChunk: cumulative reply update sent over SSE
    - ChatRequest, UploadResponse, SessionState: API payloads
"""

from src.models.schemas import (
    Attachment,
    AttachmentSummary,
    ChatRequest,
    ChatStatus,
    ContentKind,
    EncodedPayload,
    FileKind,
    InlineDataPart,
    MessagePart,
    RawFile,
    Rejection,
    Role,
    SessionState,
    StreamChunk,
    SubmitResult,
    TextPart,
    TranscriptEntry,
    TranscriptEntryView,
    UploadResponse,
)

__all__ = [
    "Attachment",
    "AttachmentSummary",
    "ChatRequest",
    "ChatStatus",
    "ContentKind",
    "EncodedPayload",
    "FileKind",
    "InlineDataPart",
    "MessagePart",
    "RawFile",
    "Rejection",
    "Role",
    "SessionState",
    "StreamChunk",
    "SubmitResult",
    "TextPart",
    "TranscriptEntry",
    "TranscriptEntryView",
    "UploadResponse",
]
