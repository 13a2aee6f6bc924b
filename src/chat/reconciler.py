"""Folds a cumulative reply stream into one transcript entry."""

import logging
from collections.abc import AsyncGenerator, AsyncIterator, Callable

from src.chat.transcript import Transcript
from src.exceptions import RemoteCallError
from src.models.schemas import ChatStatus, StreamChunk

logger = logging.getLogger(__name__)


def format_error(error: Exception) -> str:
    """User-facing text shown in place of a failed reply."""
    return f"**Error:** {error}. Please try again later."


class StreamReconciler:
    """Applies each cumulative value to a placeholder entry.

    Updates for an entry that no longer exists (the session was reset while
    the reply was streaming) are dropped and the session status is left
    untouched; the stream is still drained to its end.

    Args:
        transcript: Transcript holding the placeholder entry.
        on_status: Called with the new session status.
    """

    def __init__(
        self,
        transcript: Transcript,
        on_status: Callable[[ChatStatus], None],
    ) -> None:
        self._transcript = transcript
        self._on_status = on_status

    async def reconcile(
        self,
        entry_id: str,
        fragments: AsyncIterator[str],
    ) -> AsyncGenerator[StreamChunk]:
        """Consume the reply stream and update the entry after each value.

        Args:
            entry_id: Placeholder assistant entry.
            fragments: Cumulative reply values.

        Yields:
            One StreamChunk per applied update, then a final done chunk.
        """
        content = ""
        receiving = False
        stale = False

        try:
            async for cumulative in fragments:
                content = cumulative
                if stale:
                    continue
                applied = self._transcript.update(
                    entry_id,
                    content=cumulative,
                    in_progress=False if cumulative else None,
                )
                if not applied:
                    logger.debug(f"Dropping stale update for entry {entry_id}")
                    stale = True
                    continue
                if cumulative and not receiving:
                    receiving = True
                    self._on_status(ChatStatus.RECEIVING)
                status = ChatStatus.RECEIVING if receiving else ChatStatus.AWAITING_FIRST_TOKEN
                yield StreamChunk(content=cumulative, done=False, status=status)
        except RemoteCallError as e:
            message = format_error(e)
            if self._transcript.update(entry_id, content=message, in_progress=False):
                self._on_status(ChatStatus.FAILED)
                yield StreamChunk(
                    content=message, done=True, status=ChatStatus.FAILED, error=str(e)
                )
            return

        if self._transcript.update(entry_id, in_progress=False):
            self._on_status(ChatStatus.IDLE)
            yield StreamChunk(content=content, done=True, status=ChatStatus.IDLE)
