"""Conversation engine: log, pending PDF context and request orchestration.

Responsibilities:
    - Append-only conversation log with monotonic turn ids
    - One-shot buffer for extracted PDF text
    - Single-flight request lifecycle against the completion backend
    - Payload construction with PDF context injection

Maintains clean separation from the HTTP and UI layers.
"""

from chatpdfy.chat.conversation import (
    ConversationStore,
    PendingContextBuffer,
    RequestGate,
    RequestState,
)
from chatpdfy.chat.orchestrator import CompletionBackend, RequestOrchestrator
from chatpdfy.chat.payload import PDF_CONTEXT_MARKER, build_payload
from chatpdfy.chat.session import ChatSession, close_chat_session, get_chat_session

__all__ = [
    "PDF_CONTEXT_MARKER",
    "ChatSession",
    "CompletionBackend",
    "ConversationStore",
    "PendingContextBuffer",
    "RequestGate",
    "RequestOrchestrator",
    "RequestState",
    "build_payload",
    "close_chat_session",
    "get_chat_session",
]
