"""Conversation state owned by a chat session.

- ConversationStore: ordered, append-only log of turns
- PendingContextBuffer: extracted PDF text waiting for the next send
- RequestGate: idle / awaiting-reply state machine enforcing single-flight
"""

import itertools
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum

from chatpdfy.models.schemas import Turn

logger = logging.getLogger(__name__)


class ConversationStore:
    """Append-only conversation log.

    Turns are only ever added at the end. The only way to remove anything is
    ``clear()``, which empties the whole log and notifies clear listeners.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []
        # Not reset on clear: ids are never reused.
        self._ids = itertools.count(1)
        self._clear_listeners: list[Callable[[], None]] = []

    def __len__(self) -> int:
        return len(self._turns)

    def add_clear_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback invoked after every ``clear()``."""
        self._clear_listeners.append(listener)

    def append(self, turn: Turn) -> Turn:
        """Append a turn, assigning ``id`` and ``created_at`` when unset.

        Args:
            turn: The turn to append.

        Returns:
            The stored turn.
        """
        updates: dict[str, object] = {}
        if turn.id is None:
            updates["id"] = next(self._ids)
        if turn.created_at is None:
            now = datetime.now(UTC)
            if self._turns and self._turns[-1].created_at and self._turns[-1].created_at > now:
                now = self._turns[-1].created_at
            updates["created_at"] = now

        stored = turn.model_copy(update=updates) if updates else turn
        self._turns.append(stored)
        logger.debug(f"Appended turn {stored.id} ({stored.role.value}/{stored.kind.value})")
        return stored

    def snapshot(self) -> tuple[Turn, ...]:
        """Return the full log in creation order."""
        return tuple(self._turns)

    def clear(self) -> None:
        """Empty the log and notify clear listeners."""
        self._turns.clear()
        for listener in self._clear_listeners:
            listener()
        logger.info("Conversation cleared")


class PendingContextBuffer:
    """One-shot holder for the most recently extracted corpus."""

    def __init__(self) -> None:
        self._value = ""

    @property
    def is_empty(self) -> bool:
        return not self._value

    def set(self, text: str) -> None:
        """Overwrite the held corpus."""
        self._value = text

    def drain(self) -> str:
        """Return the held corpus and reset to empty."""
        value, self._value = self._value, ""
        return value

    def clear(self) -> None:
        self._value = ""


class RequestState(str, Enum):
    """Lifecycle of the single outstanding request."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting-reply"


class RequestGate:
    """Single-flight gate with two transitions: begin and reply_arrived.

    Each begin hands out a ticket. A reply only moves the gate back to idle
    if its ticket belongs to the latest flight, so a late reply from a
    flight abandoned by ``reset()`` cannot end a newer flight's window.
    """

    def __init__(self) -> None:
        self._state = RequestState.IDLE
        self._tickets = itertools.count(1)
        self._current = 0

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def awaiting_reply(self) -> bool:
        return self._state is RequestState.AWAITING_REPLY

    def begin(self) -> int | None:
        """Move idle -> awaiting-reply.

        Returns:
            The flight ticket, or None if a reply is already pending.
        """
        if self.awaiting_reply:
            return None
        self._current = next(self._tickets)
        self._state = RequestState.AWAITING_REPLY
        return self._current

    def reply_arrived(self, ticket: int) -> None:
        """Move awaiting-reply -> idle for the latest flight."""
        if ticket == self._current:
            self._state = RequestState.IDLE
        else:
            logger.debug(f"Ignoring reply from superseded flight {ticket}")

    def reset(self) -> None:
        self._state = RequestState.IDLE
