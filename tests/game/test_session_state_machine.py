from __future__ import annotations

import pytest

from trivia_engine.game.errors import InvalidTransitionError, StateError
from trivia_engine.game.sessions.state_machine import SessionStateMachine


@pytest.mark.parametrize(
    ("from_status", "to_status"),
    [
        ("setup", "in_progress"),
        ("in_progress", "paused"),
        ("paused", "in_progress"),
        ("in_progress", "completed"),
        ("paused", "completed"),
        ("setup", "cancelled"),
        ("in_progress", "cancelled"),
        ("paused", "cancelled"),
    ],
)
def test_allowed_transitions(from_status: str, to_status: str) -> None:
    assert SessionStateMachine.can_transition(from_status, to_status) is True
    SessionStateMachine.ensure_transition(from_status, to_status)


@pytest.mark.parametrize(
    ("from_status", "to_status"),
    [
        ("setup", "completed"),
        ("setup", "paused"),
        ("completed", "in_progress"),
        ("completed", "cancelled"),
        ("cancelled", "in_progress"),
        ("in_progress", "setup"),
    ],
)
def test_rejected_transitions_raise_state_error(from_status: str, to_status: str) -> None:
    assert SessionStateMachine.can_transition(from_status, to_status) is False
    with pytest.raises(InvalidTransitionError):
        SessionStateMachine.ensure_transition(from_status, to_status)
    assert issubclass(InvalidTransitionError, StateError)


def test_terminal_statuses() -> None:
    assert SessionStateMachine.is_terminal("completed") is True
    assert SessionStateMachine.is_terminal("cancelled") is True
    assert SessionStateMachine.is_terminal("paused") is False
