"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests over ASGI transport
    - Document conversion with generated DOCX, XLSX and PDF files
    - Full chat workflow from upload to streamed reply

The remote model is the only replaced collaborator.
"""
