"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface on one server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles API routes, NiceGUI handles the UI.
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.chat.session import build_chat_session
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    # Fail at startup on missing configuration rather than on first request.
    app = create_app(chat_session=build_chat_session())

    ui.run_with(
        app,
        title="LexAI",
        favicon="⚖️",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "lexai-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting LexAI on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
