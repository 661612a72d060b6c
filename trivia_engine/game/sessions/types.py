from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(slots=True)
class QuestionView:
    session_id: UUID
    assignment_id: UUID
    question_id: str
    prompt: str
    category: str
    round_number: int
    question_number: int
    overall_question_number: int
    total_questions: int
    answers: tuple[str, ...]


@dataclass(slots=True)
class SessionView:
    session_id: UUID
    game_id: UUID
    user_id: int
    status: str
    total_rounds: int
    questions_per_round: int
    current_round: int
    current_question_index: int
    total_score: int
    started_at: datetime | None = None
    ended_at: datetime | None = None
    paused_ms: int = 0
    total_duration_ms: int | None = None


@dataclass(slots=True)
class StartGameResult:
    session: SessionView
    first_question: QuestionView


@dataclass(slots=True)
class AnswerResult:
    is_correct: bool
    correct_answer: str
    updated_score: int
    round_complete: bool
    game_complete: bool
    session: SessionView
    next_question: QuestionView | None = None


@dataclass(slots=True)
class RoundSummary:
    round_number: int
    correct_answers: int
    total_questions: int
    accuracy_percentage: float
    duration_ms: int


@dataclass(slots=True)
class GameSummary:
    session_id: UUID
    game_id: UUID
    status: str
    total_score: int
    total_questions: int
    correct_answers: int
    answered_questions: int
    accuracy_percentage: float
    total_duration_ms: int
    personal_best: bool
    rounds: list[RoundSummary] = field(default_factory=list)
