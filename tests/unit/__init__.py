"""Unit tests for individual components in isolation.

Coverage:
    - models/: Turn validation
    - parsing/: PDF page text, corpus blocks and batch extraction
    - chat/: Conversation log, context buffer, request gate and payloads
    - client/: Gemini configuration and HTTP client
    - ui/: Turn presentation

Uses scripted doubles for the completion backend and an httpx mock
transport for upstream calls.
"""
