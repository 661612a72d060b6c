from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(slots=True)
class GameView:
    game_id: UUID
    host_id: int
    title: str
    total_rounds: int
    questions_per_round: int
    categories: tuple[str, ...]
    status: str
    created_at: datetime

    @property
    def total_questions(self) -> int:
        return self.total_rounds * self.questions_per_round
