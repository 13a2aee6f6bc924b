"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: classification, codec transforms and extractors
    - attachments/: batch submit and delivery tracking
    - agent/: configuration, part assembly and dialogue lifecycle
    - chat/: reconciler, transcript and session state
"""
