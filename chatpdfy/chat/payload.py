"""Outgoing payload construction.

File-summary turns never reach the model directly; the text they stand for
arrives only through the pending corpus, appended to the last message.
"""

from collections.abc import Sequence
from typing import Literal

from chatpdfy.models.schemas import OutgoingMessage, Role, Turn

PDF_CONTEXT_MARKER = "\n\n---\nPDF Content:\n"


def upstream_role(role: Role) -> Literal["user", "model"]:
    return "user" if role is Role.USER else "model"


def build_payload(turns: Sequence[Turn], pending_corpus: str = "") -> list[OutgoingMessage]:
    """Build the role-tagged message list for one completion request.

    Args:
        turns: Conversation log snapshot in creation order.
        pending_corpus: Drained PDF corpus, empty if none is pending.

    Returns:
        Messages in log order without file-summary turns. When a corpus is
        given, the last message's text ends with the PDF context marker
        followed by the corpus.
    """
    payload = [
        OutgoingMessage(role=upstream_role(turn.role), text=turn.content)
        for turn in turns
        if not turn.is_file_summary
    ]
    if pending_corpus and payload:
        last = payload[-1]
        payload[-1] = last.model_copy(update={"text": f"{last.text}{PDF_CONTEXT_MARKER}{pending_corpus}"})
    return payload
