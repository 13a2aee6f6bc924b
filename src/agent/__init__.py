"""Remote model conversation for the legal assistant.

Responsibilities:
    - Gemini dialogue creation bound to the system instruction
    - Message part assembly from text and attachments
    - Cumulative streaming of the reply
    - Dialogue reset

The dialogue is created lazily and kept across turns, so the remote side
carries the conversation history.
"""

from src.agent.config import AgentConfig, get_agent_config
from src.agent.conversation import ConversationSession, build_parts
from src.agent.dialogue import (
    Dialogue,
    GeminiDialogue,
    GeminiDialogueFactory,
    create_gemini_dialogue,
)

__all__ = [
    "AgentConfig",
    "ConversationSession",
    "Dialogue",
    "GeminiDialogue",
    "GeminiDialogueFactory",
    "build_parts",
    "create_gemini_dialogue",
    "get_agent_config",
]
