"""Conversation session with the remote model.

Owns one logical dialogue: created lazily on the first send, reused for every
later turn, and dropped only by `reset()`.

Streaming contract: `send` yields the cumulative reply text after every
fragment, never a bare delta, so the latest value is always the complete
answer so far.
"""

import logging
from collections.abc import AsyncGenerator, Sequence

from src.agent.config import AgentConfig, get_agent_config
from src.agent.dialogue import Dialogue, DialogueFactory, GeminiDialogueFactory
from src.exceptions import InvalidSendRequest, RemoteCallError
from src.models.schemas import (
    Attachment,
    ContentKind,
    InlineDataPart,
    MessagePart,
    TextPart,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_MARKER = "Requested entity was not found"


def build_parts(
    text: str,
    attachments: Sequence[Attachment],
    default_prompt: str,
) -> list[MessagePart]:
    """Assemble the parts of one outgoing turn.

    One part per attachment in the given order, then the text. When only
    attachments are sent, the default prompt takes the place of the text.

    Raises:
        InvalidSendRequest: Neither text nor attachments were given.
    """
    if not text and not attachments:
        raise InvalidSendRequest("Cannot send an empty message without attachments")

    parts: list[MessagePart] = []
    for attachment in attachments:
        if attachment.kind is ContentKind.EMBEDDED_TEXT:
            parts.append(TextPart(text=f"[Document: {attachment.name}]\n{attachment.text}"))
        else:
            parts.append(InlineDataPart(mime_type=attachment.mime_type, data=attachment.data))

    if text:
        parts.append(TextPart(text=text))
    elif attachments:
        parts.append(TextPart(text=default_prompt))

    return parts


def _describe_failure(error: Exception) -> str:
    message = str(error) or type(error).__name__
    if _NOT_FOUND_MARKER in message:
        return "API Key configuration issue. Please ensure your project is properly set up"
    return message


class ConversationSession:
    """Single dialogue with the remote model.

    Args:
        config: Optional agent configuration.
                Loads from environment if not provided.
        dialogue_factory: Creates the remote dialogue. Defaults to Gemini
            dialogues sharing one client.
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        dialogue_factory: DialogueFactory | None = None,
    ) -> None:
        self._config = config or get_agent_config()
        self._dialogue_factory = dialogue_factory or GeminiDialogueFactory()
        self._dialogue: Dialogue | None = None

    @property
    def has_dialogue(self) -> bool:
        """Whether a conversation has been started with the remote service."""
        return self._dialogue is not None

    def _ensure_dialogue(self) -> Dialogue:
        if self._dialogue is None:
            try:
                self._dialogue = self._dialogue_factory(self._config)
            except Exception as e:
                logger.error(f"Failed to create dialogue: {e}")
                raise RemoteCallError(_describe_failure(e)) from e
        return self._dialogue

    async def send(
        self,
        text: str,
        attachments: Sequence[Attachment] = (),
    ) -> AsyncGenerator[str]:
        """Send one turn and stream the cumulative reply.

        Args:
            text: User prompt, possibly empty when attachments are given.
            attachments: Attachments not yet delivered, in upload order.

        Yields:
            The full reply text received so far, after each fragment.

        Raises:
            InvalidSendRequest: Nothing to send.
            RemoteCallError: The remote call failed. The dialogue is kept.
        """
        parts = build_parts(text, attachments, self._config.default_document_prompt)
        dialogue = self._ensure_dialogue()

        full_text = ""
        try:
            async for fragment in dialogue.send_turn(parts):
                if fragment:
                    full_text += fragment
                    yield full_text
        except Exception as e:
            logger.error(f"Remote call failed: {e}")
            raise RemoteCallError(_describe_failure(e)) from e

    def reset(self) -> None:
        """Discard the dialogue; the next send starts with no history."""
        self._dialogue = None
        logger.info("Conversation reset")
