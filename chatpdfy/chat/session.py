"""Chat session wiring conversation state, extraction and orchestration.

A ChatSession owns the conversation log, the pending context buffer and the
request gate, and injects them into the orchestrator. Clearing the log also
clears the buffer and resets the gate.

The HTTP API and the web UI share one process-wide session obtained through
``get_chat_session()``.
"""

import asyncio
import logging
import uuid
from collections.abc import Sequence

from chatpdfy.chat.conversation import (
    ConversationStore,
    PendingContextBuffer,
    RequestGate,
    RequestState,
)
from chatpdfy.chat.orchestrator import CompletionBackend, RequestOrchestrator
from chatpdfy.client.gemini import GeminiClient
from chatpdfy.models.schemas import ConversationState, ExtractionBatch, Turn, UploadedFile
from chatpdfy.parsing.extractor import DocumentExtractor
from chatpdfy.parsing.pdf_parser import PypdfBackend

logger = logging.getLogger(__name__)


class ChatSession:
    """A single conversation with optional PDF context."""

    def __init__(
        self,
        backend: CompletionBackend,
        extractor: DocumentExtractor | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            backend: Remote completion capability.
            extractor: Document extractor. Defaults to one backed by pypdf.
        """
        self.session_id = str(uuid.uuid4())
        self.store = ConversationStore()
        self.context = PendingContextBuffer()
        self.gate = RequestGate()
        self.extractor = extractor or DocumentExtractor(PypdfBackend())
        self._backend = backend
        self.orchestrator = RequestOrchestrator(self.store, self.context, self.gate, backend)

        self.store.add_clear_listener(self.context.clear)
        self.store.add_clear_listener(self.gate.reset)

    @property
    def turns(self) -> tuple[Turn, ...]:
        return self.store.snapshot()

    @property
    def request_state(self) -> RequestState:
        return self.gate.state

    @property
    def awaiting_reply(self) -> bool:
        return self.gate.awaiting_reply

    @property
    def has_pending_context(self) -> bool:
        return not self.context.is_empty

    def state(self) -> ConversationState:
        return ConversationState(
            turns=list(self.turns),
            awaiting_reply=self.awaiting_reply,
            has_pending_context=self.has_pending_context,
        )

    def apply_extraction(self, batch: ExtractionBatch) -> list[Turn]:
        """Append a batch's summary turns and hand its corpus to the buffer.

        The corpus replaces any unconsumed one. A batch in which no file was
        extracted leaves the buffer untouched.

        Returns:
            The stored file-summary turns.
        """
        stored = [self.store.append(turn) for turn in batch.turns]
        if batch.has_content:
            self.context.set(batch.corpus)
        return stored

    async def upload(self, uploads: Sequence[UploadedFile]) -> ExtractionBatch:
        """Extract in a worker thread, then apply the result on the event loop.

        Raises:
            PdfBackendUnavailableError: If the PDF backend is not initialized.
        """
        batch = await asyncio.to_thread(self.extractor.extract, list(uploads))
        self.apply_extraction(batch)
        return batch

    async def send(self, text: str) -> Turn | None:
        return await self.orchestrator.send(text)

    def clear(self) -> None:
        """Empty the conversation, drop pending context and reset the gate.

        A reply still in flight is appended when it arrives.
        """
        self.store.clear()

    async def aclose(self) -> None:
        aclose = getattr(self._backend, "aclose", None)
        if aclose is not None:
            await aclose()


# Module-level singleton instance
_chat_session: ChatSession | None = None


def get_chat_session() -> ChatSession:
    """Get or create the global chat session.

    Returns:
        The ChatSession instance, talking to Gemini.
    """
    global _chat_session
    if _chat_session is None:
        _chat_session = ChatSession(GeminiClient())
        logger.info(f"Created chat session {_chat_session.session_id}")
    return _chat_session


async def close_chat_session() -> None:
    """Close and forget the global chat session, if one was created."""
    global _chat_session
    if _chat_session is not None:
        await _chat_session.aclose()
        _chat_session = None
