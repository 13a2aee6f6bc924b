"""Request dependencies shared by the routers."""

from fastapi import Request

from src.chat.session import ChatSession, build_chat_session


def get_chat_session(request: Request) -> ChatSession:
    """Return the application's chat session, creating it on first use.

    Args:
        request: Incoming request carrying the application state.

    Returns:
        The single ChatSession hosted by this application.
    """
    state = request.app.state
    if getattr(state, "chat_session", None) is None:
        state.chat_session = build_chat_session()
    return state.chat_session
