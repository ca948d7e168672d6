"""Read-only projection of conversation turns into display rows."""

from collections.abc import Iterable
from dataclasses import dataclass

from chatpdfy.models.schemas import Role, Turn

PENDING_PLACEHOLDER = "Typing...."


@dataclass(frozen=True)
class TurnView:
    """Display-ready row for one turn."""

    key: int | None
    is_user: bool
    is_file: bool
    text: str
    time_label: str
    file_title: str = ""
    file_details: str = ""


def time_label(turn: Turn) -> str:
    if turn.created_at is None:
        return ""
    return turn.created_at.astimezone().strftime("%I:%M %p")


def present_turn(turn: Turn) -> TurnView:
    is_user = turn.role is Role.USER
    if turn.is_file_summary and turn.file_meta is not None:
        meta = turn.file_meta
        return TurnView(
            key=turn.id,
            is_user=is_user,
            is_file=True,
            text="",
            time_label=time_label(turn),
            file_title=meta.name,
            file_details=f"{meta.page_count} pages • {meta.size_label} • PDF",
        )
    return TurnView(
        key=turn.id,
        is_user=is_user,
        is_file=False,
        text=turn.content,
        time_label=time_label(turn),
    )


def present(turns: Iterable[Turn]) -> list[TurnView]:
    return [present_turn(turn) for turn in turns]
