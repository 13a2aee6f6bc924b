"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.attachments import router as attachments_router
from src.api.chat import router as chat_router
from src.chat.session import ChatSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting LexAI API...")
    yield
    logger.info("Shutting down LexAI API...")


def create_app(chat_session: ChatSession | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        chat_session: Optional pre-built session. When omitted, one is built
                      from the environment on the first request.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="LexAI API",
        description=(
            "Legal assistant chat API. Accepts PDF, DOCX, TXT and spreadsheet "
            "attachments, converts them for the model and streams replies "
            "as Server-Sent Events."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.chat_session = chat_session

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(attachments_router)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "lexai"}

    return application


app = create_app()
