"""Chat session state: transcript, pending attachments, dialogue and status.

One ChatSession is one browser-tab conversation. All state lives on the
instance, so independent sessions can coexist in one process.
"""

import logging
import uuid
from collections.abc import AsyncGenerator, Callable, Sequence

from src.agent.config import AgentConfig
from src.agent.conversation import ConversationSession
from src.agent.dialogue import DialogueFactory
from src.attachments.config import AttachmentConfig
from src.attachments.manager import AttachmentManager
from src.chat.reconciler import StreamReconciler
from src.chat.transcript import Transcript
from src.exceptions import InvalidSendRequest
from src.models.schemas import (
    Attachment,
    ChatStatus,
    RawFile,
    Role,
    SessionState,
    StreamChunk,
    SubmitResult,
    TranscriptEntry,
    TranscriptEntryView,
)
from src.parsing import build_default_codec

logger = logging.getLogger(__name__)

ATTACHMENTS_ONLY_CONTENT = "Please analyze the attached files."

_BUSY_STATUSES = (ChatStatus.AWAITING_FIRST_TOKEN, ChatStatus.RECEIVING)


class ReplyStream:
    """Async iterator over the chunks of one reply.

    Closing it releases the session whether or not iteration has started:
    the placeholder entry is finalized and a busy status returns to idle.
    """

    def __init__(
        self,
        chunks: AsyncGenerator[StreamChunk],
        on_abandon: Callable[[], None],
    ) -> None:
        self._chunks = chunks
        self._on_abandon = on_abandon
        self._started = False
        self._closed = False

    def __aiter__(self) -> "ReplyStream":
        return self

    async def __anext__(self) -> StreamChunk:
        self._started = True
        return await self._chunks.__anext__()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._started:
            # The generator body never ran, so its cleanup will not either.
            self._on_abandon()
        await self._chunks.aclose()


class ChatSession:
    """Coordinates attachments, the remote conversation and the transcript.

    Args:
        attachments: Pending attachment set.
        conversation: Remote dialogue owner.
    """

    def __init__(
        self,
        attachments: AttachmentManager,
        conversation: ConversationSession,
    ) -> None:
        self.attachments = attachments
        self.conversation = conversation
        self.transcript = Transcript()
        self.status = ChatStatus.IDLE
        self.draft = ""

    @property
    def is_busy(self) -> bool:
        return self.status in _BUSY_STATUSES

    def _set_status(self, status: ChatStatus) -> None:
        self.status = status

    async def upload(self, files: Sequence[RawFile]) -> SubmitResult:
        return await self.attachments.submit(files)

    def remove_attachment(self, attachment_id: str) -> bool:
        return self.attachments.remove(attachment_id)

    def send(self, text: str = "") -> ReplyStream:
        """Start a turn and return the stream of reply updates.

        Validation and transcript setup happen immediately, before the
        returned stream is iterated.

        Args:
            text: User prompt. May be blank when attachments are pending.

        Returns:
            Async stream of cumulative reply chunks. Close it if it is
            dropped before being consumed.

        Raises:
            InvalidSendRequest: A reply is already streaming, or there is
                neither text nor a pending attachment.
        """
        if self.is_busy:
            raise InvalidSendRequest("A reply is already in progress")

        text = text.strip()
        pending = self.attachments.undelivered()
        if not text and not pending:
            raise InvalidSendRequest("Type a message or attach a document first")

        user_entry = TranscriptEntry(
            id=uuid.uuid4().hex,
            role=Role.USER,
            content=text or ATTACHMENTS_ONLY_CONTENT,
            attachments=pending,
        )
        reply_entry = TranscriptEntry(
            id=uuid.uuid4().hex,
            role=Role.ASSISTANT,
            in_progress=True,
        )
        self.transcript.append(user_entry)
        self.transcript.append(reply_entry)
        self.attachments.mark_delivered(a.id for a in pending)
        self.draft = ""
        self.status = ChatStatus.AWAITING_FIRST_TOKEN

        logger.info(f"Sending turn with {len(pending)} attachment(s)")
        return ReplyStream(
            self._stream_reply(reply_entry.id, text, pending),
            on_abandon=lambda: self._abandon(reply_entry.id),
        )

    async def _stream_reply(
        self,
        entry_id: str,
        text: str,
        attachments: list[Attachment],
    ) -> AsyncGenerator[StreamChunk]:
        reconciler = StreamReconciler(self.transcript, self._set_status)
        finished = False
        try:
            yield StreamChunk(content="", done=False, status=ChatStatus.AWAITING_FIRST_TOKEN)
            async for chunk in reconciler.reconcile(
                entry_id, self.conversation.send(text, attachments)
            ):
                finished = chunk.done
                yield chunk
        finally:
            if not finished:
                self._abandon(entry_id)

    def _abandon(self, entry_id: str) -> None:
        """Finalize a reply whose consumer went away before it completed."""
        if self.transcript.update(entry_id, in_progress=False) and self.is_busy:
            self.status = ChatStatus.IDLE

    def reset(self) -> None:
        """Clear attachments, transcript, draft and the remote dialogue."""
        self.attachments.clear()
        self.transcript.clear()
        self.draft = ""
        self.conversation.reset()
        self.status = ChatStatus.IDLE
        logger.info("Chat session reset")

    def snapshot(self) -> SessionState:
        """Read-only view for the presentation layer."""
        return SessionState(
            status=self.status,
            transcript=[
                TranscriptEntryView(
                    id=entry.id,
                    role=entry.role,
                    content=entry.content,
                    created_at=entry.created_at,
                    in_progress=entry.in_progress,
                    attachments=[a.summary() for a in entry.attachments],
                )
                for entry in self.transcript
            ],
            attachments=[a.summary() for a in self.attachments.pending],
        )


def build_chat_session(
    agent_config: AgentConfig | None = None,
    attachment_config: AttachmentConfig | None = None,
    dialogue_factory: DialogueFactory | None = None,
) -> ChatSession:
    """Create a chat session wired with the default codec and Gemini dialogue."""
    return ChatSession(
        attachments=AttachmentManager(build_default_codec(attachment_config)),
        conversation=ConversationSession(agent_config, dialogue_factory),
    )
