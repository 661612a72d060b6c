from __future__ import annotations

from .sessions_create import create_session
from .sessions_lifecycle import cancel_game, complete_game, pause_game, resume_game
from .sessions_queries import get_current_question, get_game_summary, get_session
from .sessions_start import start_game
from .sessions_submit import submit_answer

__all__ = [
    "cancel_game",
    "complete_game",
    "create_session",
    "get_current_question",
    "get_game_summary",
    "get_session",
    "pause_game",
    "resume_game",
    "start_game",
    "submit_answer",
]
