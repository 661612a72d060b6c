from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(slots=True)
class RecentGame:
    session_id: UUID
    game_id: UUID
    total_score: int
    ended_at: datetime | None


@dataclass(slots=True)
class UserStats:
    user_id: int
    games_completed: int
    games_hosted: int
    total_score: int
    best_score: int
    correct_answers: int
    questions_answered: int
    average_accuracy: float
    total_play_ms: int
    favorite_category: str | None = None
    last_completed_at: datetime | None = None
    recent_games: list[RecentGame] = field(default_factory=list)
