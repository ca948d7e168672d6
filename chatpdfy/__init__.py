"""ChatPDFy - chat with a language model grounded in uploaded PDF documents.

Combines FastAPI for the HTTP surface, NiceGUI for the chat interface,
pypdf for text extraction, httpx for the Gemini completion API, and
Pydantic for data validation.

Components:
    - models: Turn, payload and request/response schemas
    - parsing: PDF extraction and corpus assembly
    - chat: conversation log, pending context and request orchestration
    - client: Gemini completion client and its configuration
    - api: HTTP endpoints
    - ui: Web interface for chat interactions
"""

__version__ = "0.1.0"
