"""Chat endpoints: SSE reply streaming, session snapshot and reset."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from src.api.dependencies import get_chat_session
from src.chat.session import ChatSession, ReplyStream
from src.exceptions import InvalidSendRequest
from src.models.schemas import ChatRequest, SessionState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

SessionDep = Annotated[ChatSession, Depends(get_chat_session)]


async def _sse_events(stream: ReplyStream) -> AsyncGenerator[str]:
    """Format stream chunks as Server-Sent Events."""
    async for chunk in stream:
        yield f"data: {chunk.model_dump_json()}\n\n"


class ReplyStreamingResponse(StreamingResponse):
    """SSE response that always closes its reply stream.

    The stream is closed even when the client disconnects before the body
    starts, so the session never stays busy on an abandoned turn.
    """

    def __init__(self, stream: ReplyStream) -> None:
        super().__init__(
            _sse_events(stream),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
        self.reply_stream = stream

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.reply_stream.aclose()


@router.post("/stream")
async def stream_chat(request: ChatRequest, session: SessionDep) -> ReplyStreamingResponse:
    """Send a turn and stream the reply as Server-Sent Events.

    Pending attachments are sent along with the message. Every event carries
    the complete reply so far.

    Raises:
        409: A reply is already streaming.
        400: Empty message and no pending attachments.
    """
    if session.is_busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reply is already in progress",
        )

    try:
        stream = session.send(request.message)
    except InvalidSendRequest as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return ReplyStreamingResponse(stream)


@router.get("/session", response_model=SessionState)
async def get_session(session: SessionDep) -> SessionState:
    """Return status, transcript and attachments of the session."""
    return session.snapshot()


@router.post("/reset", response_model=SessionState)
async def reset_session(session: SessionDep) -> SessionState:
    """Start over: clear transcript and attachments and drop the dialogue."""
    session.reset()
    return session.snapshot()
