"""Request orchestration for the conversation.

One send at a time: the user turn is appended, the pending PDF context is
drained into the payload, the completion backend is called, and exactly one
assistant turn is appended afterwards, whether the call succeeded or not.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from chatpdfy.chat.conversation import ConversationStore, PendingContextBuffer, RequestGate
from chatpdfy.chat.payload import build_payload
from chatpdfy.models.schemas import OutgoingMessage, Turn

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Oops! Something went wrong while getting the answer."


class CompletionBackend(Protocol):
    """Remote capability producing a reply for an ordered message list."""

    async def complete(self, messages: Sequence[OutgoingMessage]) -> str: ...


class RequestOrchestrator:
    """Sends user messages and records replies in the conversation log."""

    def __init__(
        self,
        store: ConversationStore,
        context: PendingContextBuffer,
        gate: RequestGate,
        backend: CompletionBackend,
    ) -> None:
        self._store = store
        self._context = context
        self._gate = gate
        self._backend = backend

    async def send(self, user_text: str) -> Turn | None:
        """Send a user message and append the reply.

        Blank input, or a send while a reply is pending, is rejected without
        touching any state.

        Args:
            user_text: The raw text typed by the user.

        Returns:
            The appended assistant turn, or None if the send was rejected.
        """
        text = user_text.strip()
        if not text:
            logger.debug("Ignoring blank message")
            return None

        # Everything up to the backend call runs without yielding to the loop.
        ticket = self._gate.begin()
        if ticket is None:
            logger.debug("Ignoring message while a reply is pending")
            return None
        self._store.append(Turn.user_text(text))

        pending = self._context.drain()
        payload = build_payload(self._store.snapshot(), pending)
        logger.info(
            f"Sending {len(payload)} message(s)"
            + (f" with {len(pending)} characters of PDF context" if pending else "")
        )

        try:
            try:
                reply_text = await self._backend.complete(payload)
            except Exception:
                logger.exception("Completion backend failed")
                reply_text = FALLBACK_REPLY
            return self._store.append(Turn.assistant_text(reply_text))
        finally:
            self._gate.reply_arrived(ticket)
