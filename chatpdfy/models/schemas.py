from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class TurnKind(str, Enum):
    """What a turn carries: plain text or an uploaded-file summary."""

    TEXT = "text"
    FILE_SUMMARY = "file-summary"


class FileMeta(BaseModel):
    """Summary of one uploaded PDF as shown in the conversation.

    Attributes:
        name: Original file name.
        size_label: Human readable size ("500 B", "2.0 KB", "3.0 MB").
        page_count: Number of pages in the document.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    size_label: str
    page_count: int = Field(ge=0)


class Turn(BaseModel):
    """One immutable entry in the conversation log.

    ``id`` and ``created_at`` are left unset by callers and assigned by the
    conversation store when the turn is appended.

    Attributes:
        role: The speaker (user, assistant, or system).
        kind: Plain text or file-summary.
        content: The message text, empty for file-summary turns.
        id: Monotonic identifier assigned at append.
        created_at: Append time, monotonic in log order.
        file_meta: Present only on file-summary turns.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    kind: TurnKind = TurnKind.TEXT
    content: str = ""
    id: int | None = None
    created_at: datetime | None = None
    file_meta: FileMeta | None = None

    @model_validator(mode="after")
    def check_file_meta(self) -> "Turn":
        """File metadata must be present exactly on file-summary turns."""
        if self.kind is TurnKind.FILE_SUMMARY:
            if self.file_meta is None:
                raise ValueError("file-summary turns require file_meta")
            if self.content:
                raise ValueError("file-summary turns carry no content")
        elif self.file_meta is not None:
            raise ValueError("file_meta is only allowed on file-summary turns")
        return self

    @classmethod
    def user_text(cls, content: str) -> "Turn":
        return cls(role=Role.USER, kind=TurnKind.TEXT, content=content)

    @classmethod
    def assistant_text(cls, content: str) -> "Turn":
        return cls(role=Role.ASSISTANT, kind=TurnKind.TEXT, content=content)

    @classmethod
    def file_summary(cls, file_meta: FileMeta) -> "Turn":
        return cls(role=Role.USER, kind=TurnKind.FILE_SUMMARY, file_meta=file_meta)

    @property
    def is_file_summary(self) -> bool:
        return self.kind is TurnKind.FILE_SUMMARY


class OutgoingMessage(BaseModel):
    """One element of the payload sent to the completion API.

    Attributes:
        role: Upstream role, "user" or "model".
        text: The message text, possibly carrying appended PDF context.
    """

    role: Literal["user", "model"]
    text: str


class UploadedFile(BaseModel):
    """Raw bytes of one file selected for upload."""

    model_config = ConfigDict(frozen=True)

    name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class FileExtraction(BaseModel):
    """Successful extraction of a single PDF.

    Attributes:
        turn: The file-summary turn to append to the conversation.
        corpus_block: The "--- PDF: <name> ---" block for the shared corpus.
    """

    turn: Turn
    corpus_block: str


class ExtractionFailure(BaseModel):
    """A file that was skipped because it is not a PDF or could not be parsed.

    Attributes:
        name: Original file name.
        reason: Human readable reason the file was skipped.
    """

    name: str
    reason: str


class ExtractionBatch(BaseModel):
    """Outcome of extracting one upload batch.

    Attributes:
        turns: File-summary turns in upload order.
        corpus: Trimmed concatenation of every successful file's block.
        failures: Files that were skipped.
    """

    turns: list[Turn] = Field(default_factory=list)
    corpus: str = ""
    failures: list[ExtractionFailure] = Field(default_factory=list)

    @property
    def has_content(self) -> bool:
        """Whether at least one file was extracted."""
        return bool(self.turns)


class ChatRequest(BaseModel):
    """Request payload for sending a chat message.

    Attributes:
        message: User's question or prompt. Blank after stripping is
            accepted here and ignored by the session.
    """

    message: str

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Response after a message was answered.

    Attributes:
        reply: The assistant turn appended to the conversation.
    """

    reply: Turn


class UploadResponse(BaseModel):
    """Response after PDF upload processing.

    Attributes:
        files: Summaries of the files that were extracted, in upload order.
        failures: Files that were skipped.
    """

    files: list[FileMeta]
    failures: list[ExtractionFailure] = Field(default_factory=list)


class ConversationState(BaseModel):
    """Snapshot of the conversation for rendering clients.

    Attributes:
        turns: The full conversation log in creation order.
        awaiting_reply: Whether a reply is currently pending.
        has_pending_context: Whether extracted PDF text waits for the next send.
    """

    turns: list[Turn]
    awaiting_reply: bool
    has_pending_context: bool
