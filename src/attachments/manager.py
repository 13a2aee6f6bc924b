"""Pending attachment set with batch submit and delivery tracking."""

import asyncio
import logging
import uuid
from collections.abc import Iterable, Sequence

from src.exceptions import AttachmentProcessingError, LexAIError
from src.models.schemas import Attachment, RawFile, Rejection, SubmitResult
from src.parsing.codec import DocumentCodec

logger = logging.getLogger(__name__)


class AttachmentManager:
    """Validates uploads, runs the codec and owns the pending attachment set.

    Each file in a batch is processed independently: one failure becomes a
    rejection and never affects its siblings.
    """

    def __init__(self, codec: DocumentCodec) -> None:
        self._codec = codec
        self._pending: list[Attachment] = []

    @property
    def pending(self) -> list[Attachment]:
        """All attachments in upload order, delivered or not."""
        return list(self._pending)

    def undelivered(self) -> list[Attachment]:
        return [a for a in self._pending if not a.delivered]

    def get(self, attachment_id: str) -> Attachment | None:
        return next((a for a in self._pending if a.id == attachment_id), None)

    async def _process(self, raw: RawFile) -> Attachment | Rejection:
        try:
            # Codec work is blocking (document parsing), keep it off the loop.
            payload = await asyncio.to_thread(self._codec.process, raw)
        except LexAIError as e:
            logger.warning(f"Rejected attachment {raw.name}: {e}")
            return Rejection(file_name=raw.name, reason=str(e), error=type(e).__name__)
        except Exception as e:
            logger.exception(f"Unexpected failure processing {raw.name}")
            error = AttachmentProcessingError(raw.name, str(e) or type(e).__name__)
            return Rejection(file_name=raw.name, reason=str(error), error=type(error).__name__)

        return Attachment(
            id=uuid.uuid4().hex,
            name=raw.name,
            media_type=raw.media_type,
            size=raw.size,
            data=payload.data,
            mime_type=payload.mime_type,
            kind=payload.kind,
        )

    async def submit(self, files: Sequence[RawFile]) -> SubmitResult:
        """Validate and encode a batch of files.

        Files are processed concurrently; accepted attachments are appended to
        the pending set in input order regardless of completion order.

        Args:
            files: Files picked by the user.

        Returns:
            Accepted attachments and per-file rejections.
        """
        outcomes = await asyncio.gather(*(self._process(raw) for raw in files))

        result = SubmitResult()
        for outcome in outcomes:
            if isinstance(outcome, Attachment):
                result.accepted.append(outcome)
            else:
                result.rejections.append(outcome)

        self._pending.extend(result.accepted)
        logger.info(
            f"Submitted {len(files)} file(s): "
            f"{len(result.accepted)} accepted, {len(result.rejections)} rejected"
        )
        return result

    def remove(self, attachment_id: str) -> bool:
        """Drop an attachment from the pending set.

        Returns:
            True if an attachment was removed, False if the id was unknown.
        """
        before = len(self._pending)
        self._pending = [a for a in self._pending if a.id != attachment_id]
        return len(self._pending) < before

    def mark_delivered(self, attachment_ids: Iterable[str]) -> None:
        """Flip `delivered` for the given ids. Unknown ids are ignored."""
        wanted = set(attachment_ids)
        for attachment in self._pending:
            if attachment.id in wanted:
                attachment.mark_delivered()

    def clear(self) -> None:
        self._pending.clear()
