"""Pydantic models for conversation state and API payloads.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Turn: Immutable entry in the conversation log
    - FileMeta: Summary of an uploaded PDF (name, size label, page count)
    - OutgoingMessage: One role-tagged element of an upstream request
    - ExtractionBatch / ExtractionFailure: Results of a PDF upload batch
    - ChatRequest / ChatResponse / UploadResponse / ConversationState: HTTP schemas
"""

from chatpdfy.models.schemas import (
    ChatRequest,
    ChatResponse,
    ConversationState,
    ExtractionBatch,
    ExtractionFailure,
    FileExtraction,
    FileMeta,
    OutgoingMessage,
    Role,
    Turn,
    TurnKind,
    UploadedFile,
    UploadResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ConversationState",
    "ExtractionBatch",
    "ExtractionFailure",
    "FileExtraction",
    "FileMeta",
    "OutgoingMessage",
    "Role",
    "Turn",
    "TurnKind",
    "UploadResponse",
    "UploadedFile",
]
