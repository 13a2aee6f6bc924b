"""FastAPI endpoints for the LexAI chat client.

HTTP and streaming routes over the single in-memory chat session.
Supports Server-Sent Events for real-time reply streaming.

Endpoints:
    - GET /health: Service health status
    - POST /attachments: Batch document upload
    - GET /attachments: Attachment listing
    - DELETE /attachments/{id}: Attachment removal
    - POST /chat/stream: Reply streaming
    - GET /chat/session: Session snapshot
    - POST /chat/reset: Session reset
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
