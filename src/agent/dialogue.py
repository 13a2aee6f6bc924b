"""Remote dialogue collaborator backed by the Gemini async chat API."""

import logging
from collections.abc import AsyncIterator, Callable, Sequence
from typing import Protocol

from google import genai
from google.genai import types
from google.genai.chats import AsyncChat

from src.agent.config import AgentConfig
from src.models.schemas import InlineDataPart, MessagePart
from src.parsing.codec import decode_bytes

logger = logging.getLogger(__name__)


class Dialogue(Protocol):
    """One ongoing multi-turn conversation held by the remote service."""

    def send_turn(self, parts: Sequence[MessagePart]) -> AsyncIterator[str]:
        """Send one turn and stream back text fragments (deltas)."""
        ...


DialogueFactory = Callable[[AgentConfig], Dialogue]


def to_gemini_part(part: MessagePart) -> types.Part:
    """Convert a provider-neutral part into a Gemini content part."""
    if isinstance(part, InlineDataPart):
        return types.Part.from_bytes(data=decode_bytes(part.data), mime_type=part.mime_type)
    return types.Part.from_text(text=part.text)


class GeminiDialogue:
    """Dialogue over a `google.genai` async chat.

    The chat object keeps the conversation history on the client side, so the
    same instance must be reused for every turn.
    """

    def __init__(self, chat: AsyncChat) -> None:
        self._chat = chat

    async def send_turn(self, parts: Sequence[MessagePart]) -> AsyncIterator[str]:
        stream = await self._chat.send_message_stream(
            message=[to_gemini_part(part) for part in parts]
        )
        async for chunk in stream:
            if chunk.text:
                yield chunk.text


def create_gemini_dialogue(config: AgentConfig, client: genai.Client | None = None) -> GeminiDialogue:
    """Open a new Gemini chat bound to the system instruction and model config.

    Args:
        config: Model, system instruction and reasoning budget.
        client: Optional pre-built client (a new one is created from the API key).

    Returns:
        A fresh dialogue with no history.
    """
    client = client or genai.Client(api_key=config.api_key)

    thinking_config = None
    if config.thinking_budget is not None:
        thinking_config = types.ThinkingConfig(thinking_budget=config.thinking_budget)

    chat = client.aio.chats.create(
        model=config.model_name,
        config=types.GenerateContentConfig(
            system_instruction=config.system_instruction,
            thinking_config=thinking_config,
        ),
    )
    logger.info(f"Created Gemini dialogue with model {config.model_name}")
    return GeminiDialogue(chat)


class GeminiDialogueFactory:
    """Opens Gemini dialogues over a single client.

    The client is built on first use and reused for every later dialogue, so
    resetting a conversation does not open another HTTP client.
    """

    def __init__(self, client: genai.Client | None = None) -> None:
        self._client = client

    def __call__(self, config: AgentConfig) -> GeminiDialogue:
        if self._client is None:
            self._client = genai.Client(api_key=config.api_key)
        return create_gemini_dialogue(config, client=self._client)
