"""FastAPI endpoints for ChatPDFy.

Endpoints:
    - GET /health: Service health status
    - GET /conversation: Conversation log and request state
    - POST /conversation/upload: PDF uploads providing context for the next message
    - POST /conversation/messages: Send a message and receive the reply
    - DELETE /conversation: Clear the conversation
"""

from chatpdfy.api.app import app, create_app

__all__ = ["app", "create_app"]
