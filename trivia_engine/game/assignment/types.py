from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(slots=True)
class AssignedQuestionView:
    assignment_id: UUID
    question_id: str
    question_order: int
    category: str
    text: str
    correct_answer: str


@dataclass(slots=True)
class RoundPreview:
    round_number: int
    questions: list[AssignedQuestionView] = field(default_factory=list)


@dataclass(slots=True)
class GenerationResult:
    success: bool
    status: str
    per_category_counts: dict[str, int]
    drawn_by_category: dict[str, int]
    duplicates_found: int
    duplicate_rounds: list[int]
    rounds: list[RoundPreview]
