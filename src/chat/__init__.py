"""Chat session state and streaming reply reconciliation.

Responsibilities:
    - Session status and the ordered transcript
    - Turn setup: user entry, assistant placeholder, delivered attachments
    - Folding the cumulative reply stream into the placeholder entry
    - Reset of all session state
"""

from src.chat.reconciler import StreamReconciler, format_error
from src.chat.session import ChatSession, ReplyStream, build_chat_session
from src.chat.transcript import Transcript

__all__ = [
    "ChatSession",
    "ReplyStream",
    "StreamReconciler",
    "Transcript",
    "build_chat_session",
    "format_error",
]
