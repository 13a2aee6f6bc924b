"""LexAI - legal assistant chat client with document attachments.

Combines FastAPI for HTTP streaming, the Gemini API for the conversation,
NiceGUI for the interface, and Pydantic for data validation.

Components:
    - parsing: document classification, extraction and encoding
    - attachments: pending attachment set and delivery tracking
    - agent: remote dialogue and message assembly
    - chat: session state, transcript and reply streaming
    - api: HTTP endpoints and SSE responses
    - ui: Web interface for chat interactions
    - models: shared schemas
"""

__version__ = "0.1.0"
