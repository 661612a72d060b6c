from __future__ import annotations

from trivia_engine.game.constants import (
    SESSION_STATUS_CANCELLED,
    SESSION_STATUS_COMPLETED,
    SESSION_STATUS_IN_PROGRESS,
    SESSION_STATUS_PAUSED,
    SESSION_STATUS_SETUP,
    SESSION_TERMINAL_STATUSES,
)
from trivia_engine.game.errors import InvalidTransitionError

SESSION_TRANSITIONS: dict[str, frozenset[str]] = {
    SESSION_STATUS_SETUP: frozenset({SESSION_STATUS_IN_PROGRESS, SESSION_STATUS_CANCELLED}),
    SESSION_STATUS_IN_PROGRESS: frozenset(
        {SESSION_STATUS_PAUSED, SESSION_STATUS_COMPLETED, SESSION_STATUS_CANCELLED}
    ),
    SESSION_STATUS_PAUSED: frozenset(
        {SESSION_STATUS_IN_PROGRESS, SESSION_STATUS_COMPLETED, SESSION_STATUS_CANCELLED}
    ),
    SESSION_STATUS_COMPLETED: frozenset(),
    SESSION_STATUS_CANCELLED: frozenset(),
}


class SessionStateMachine:
    """Allowed session status moves; terminal states accept none."""

    transitions = SESSION_TRANSITIONS

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        return to_status in cls.transitions.get(from_status, frozenset())

    @classmethod
    def ensure_transition(cls, from_status: str, to_status: str) -> None:
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(f"{from_status} -> {to_status}")

    @staticmethod
    def is_terminal(status: str) -> bool:
        return status in SESSION_TERMINAL_STATUSES
