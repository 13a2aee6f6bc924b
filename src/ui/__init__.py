"""NiceGUI interface - thin visualization layer for the legal assistant.

Responsibilities:
    - Attachment sidebar with upload, removal and reset
    - Transcript display with markdown rendering of replies
    - Live reply updates from the SSE stream

Contains no business logic. Delegates all operations to the API.
"""
