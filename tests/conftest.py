"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - agent_config / attachment_config: explicit configuration, no environment
    - dialogue_factory: scripted stand-in for the Gemini dialogue
    - codec / attachment_manager / chat_session: core objects
    - async_client: HTTPX client for API testing
    - docx_bytes / xlsx_bytes / pdf_bytes: documents generated in memory
"""

import io
from collections.abc import AsyncGenerator

import openpyxl
import pytest
from docx import Document
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from src.agent.config import AgentConfig
from src.agent.conversation import ConversationSession
from src.api.app import create_app
from src.attachments.config import AttachmentConfig
from src.attachments.manager import AttachmentManager
from src.chat.session import ChatSession
from src.parsing import DocumentCodec, build_default_codec
from tests.fakes import FakeDialogueFactory


@pytest.fixture
def agent_config() -> AgentConfig:
    return AgentConfig(
        api_key="test-key",
        model_name="gemini-test",
        system_instruction="You are a test assistant.",
        thinking_budget=None,
        default_document_prompt="Summarize the documents.",
    )


@pytest.fixture
def attachment_config() -> AttachmentConfig:
    return AttachmentConfig(max_file_size_mb=50)


@pytest.fixture
def dialogue_factory() -> FakeDialogueFactory:
    return FakeDialogueFactory()


@pytest.fixture
def codec(attachment_config: AttachmentConfig) -> DocumentCodec:
    return build_default_codec(attachment_config)


@pytest.fixture
def attachment_manager(codec: DocumentCodec) -> AttachmentManager:
    return AttachmentManager(codec)


@pytest.fixture
def conversation(
    agent_config: AgentConfig, dialogue_factory: FakeDialogueFactory
) -> ConversationSession:
    return ConversationSession(agent_config, dialogue_factory)


@pytest.fixture
def chat_session(
    attachment_manager: AttachmentManager, conversation: ConversationSession
) -> ChatSession:
    return ChatSession(attachment_manager, conversation)


@pytest.fixture
async def async_client(chat_session: ChatSession) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient bound to an app hosting `chat_session`.
    """
    transport = ASGITransport(app=create_app(chat_session=chat_session))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def docx_bytes() -> bytes:
    document = Document()
    document.add_paragraph("Lease agreement between the parties.")
    document.add_paragraph("Clause 4: Rent is payable monthly.")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes() -> bytes:
    workbook = openpyxl.Workbook()
    ledger = workbook.active
    ledger.title = "Ledger"
    ledger.append(["Date", "Amount"])
    ledger.append(["2024-01-01", 1500])
    workbook.create_sheet("Empty")
    staff = workbook.create_sheet("Staff")
    staff.append(["Name", "Role"])
    staff.append(["Asha", "Clerk"])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()

