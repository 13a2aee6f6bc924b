"""Agent configuration with environment variable loading.

Pydantic-based configuration for the Gemini legal assistant.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_SYSTEM_INSTRUCTION = """You are LexAI, an elite legal assistant AI specialized in Indian Law.

**Working with large documents:**
You have a high-capacity context window. When a user uploads documents (PDF, DOCX, XLS, TXT), you MUST:
1. **Read Exhaustively:** Process the entire document context. Do not ignore parts of the file.
2. **Cite Specifics:** Refer to specific page numbers, clause numbers, or table cells from the uploaded file.
3. **Analyze Multi-Format Data:** If spreadsheets are provided, interpret the rows and columns as part of the legal case (e.g., financial statements, employee lists).

**Jurisdiction & Knowledge Base:**
- **Primary Jurisdiction:** India.
- **Key Statutes:** Constitution of India, Bharatiya Nyaya Sanhita (BNS), Bharatiya Nagarik Suraksha Sanhita (BNSS), Contract Act, Companies Act, CPC, Evidence Act.

**Tone:** Professional, Objective, Courtroom-ready.
**Disclaimer:** Remind the user you are an AI assistant, not a replacement for a registered Advocate. Use Markdown for formatting."""

DEFAULT_DOCUMENT_PROMPT = (
    "Please analyze the uploaded documents and provide a professional summary "
    "based on Indian legal standards."
)


def _env_api_key() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")


def _env_thinking_budget() -> int | None:
    value = os.getenv("THINKING_BUDGET")
    return int(value) if value else None


class AgentConfig(BaseModel):
    """Configuration for the remote Gemini dialogue.

    Attributes:
        api_key: API key for the Gemini API.
        model_name: Model identifier to use.
        system_instruction: Persona bound to every new dialogue.
        thinking_budget: Reasoning token budget (None for model default,
            -1 for dynamic, 0 to disable where supported).
        default_document_prompt: Instruction sent when only attachments are sent.
    """

    api_key: str = Field(
        default_factory=_env_api_key,
        description="API key for Gemini",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gemini-3-pro-preview"),
        description="Model to use",
    )
    system_instruction: str = Field(
        default_factory=lambda: os.getenv("SYSTEM_INSTRUCTION") or DEFAULT_SYSTEM_INSTRUCTION,
        description="System instruction for new dialogues",
    )
    thinking_budget: int | None = Field(
        default_factory=_env_thinking_budget,
        ge=-1,
        description="Reasoning budget in tokens",
    )
    default_document_prompt: str = Field(
        default=DEFAULT_DOCUMENT_PROMPT,
        min_length=1,
        description="Prompt used when attachments are sent without text",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY in .env")
        return v.strip()


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
