"""Test package for LexAI.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end workflow tests through the HTTP API

Documents are generated in fixtures; the remote model is a scripted fake.
Leverages pytest with pytest-check for soft assertions.
"""
