from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(slots=True)
class ReplacementOption:
    question_id: str
    category: str
    text: str
    correct_answer: str
    previously_used: bool


@dataclass(slots=True)
class ReplacementResult:
    assignment_id: UUID
    game_id: UUID
    round_number: int
    question_order: int
    previous_question_id: str
    question_id: str
    category: str
    text: str
