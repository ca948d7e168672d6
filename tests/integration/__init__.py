"""Integration tests for components working together as a system.

Coverage:
    - Conversation endpoints with real HTTP requests
    - PDF upload with real parsing of generated documents
    - Full flow from upload to message with context attached

The language model is never called; replies come from a scripted
backend or a mock upstream.
"""
