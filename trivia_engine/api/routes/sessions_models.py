from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from trivia_engine.game.constants import MAX_ANSWER_LENGTH
from trivia_engine.game.sessions.types import (
    AnswerResult,
    GameSummary,
    QuestionView,
    SessionView,
)


class QuestionResponse(BaseModel):
    session_id: UUID
    assignment_id: UUID
    question_id: str
    prompt: str
    category: str
    round_number: int
    question_number: int
    overall_question_number: int
    total_questions: int
    answers: list[str]


class SessionResponse(BaseModel):
    session_id: UUID
    game_id: UUID
    user_id: int
    status: str
    total_rounds: int
    questions_per_round: int
    current_round: int
    current_question_index: int
    total_score: int = Field(ge=0)
    started_at: datetime | None = None
    ended_at: datetime | None = None
    paused_ms: int = Field(default=0, ge=0)
    total_duration_ms: int | None = None


class StartGameResponse(BaseModel):
    session: SessionResponse
    first_question: QuestionResponse


class SubmitAnswerRequest(BaseModel):
    assignment_id: UUID
    user_answer: str = Field(max_length=MAX_ANSWER_LENGTH)
    time_to_answer_ms: int = Field(ge=0)


class AnswerResponse(BaseModel):
    is_correct: bool
    correct_answer: str
    updated_score: int = Field(ge=0)
    round_complete: bool
    game_complete: bool
    session: SessionResponse
    next_question: QuestionResponse | None = None


class RoundSummaryResponse(BaseModel):
    round_number: int
    correct_answers: int
    total_questions: int
    accuracy_percentage: float
    duration_ms: int


class GameSummaryResponse(BaseModel):
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
    rounds: list[RoundSummaryResponse]


def question_response(view: QuestionView) -> QuestionResponse:
    return QuestionResponse(
        session_id=view.session_id,
        assignment_id=view.assignment_id,
        question_id=view.question_id,
        prompt=view.prompt,
        category=view.category,
        round_number=view.round_number,
        question_number=view.question_number,
        overall_question_number=view.overall_question_number,
        total_questions=view.total_questions,
        answers=list(view.answers),
    )


def session_response(view: SessionView) -> SessionResponse:
    return SessionResponse(
        session_id=view.session_id,
        game_id=view.game_id,
        user_id=view.user_id,
        status=view.status,
        total_rounds=view.total_rounds,
        questions_per_round=view.questions_per_round,
        current_round=view.current_round,
        current_question_index=view.current_question_index,
        total_score=view.total_score,
        started_at=view.started_at,
        ended_at=view.ended_at,
        paused_ms=view.paused_ms,
        total_duration_ms=view.total_duration_ms,
    )


def answer_response(result: AnswerResult) -> AnswerResponse:
    return AnswerResponse(
        is_correct=result.is_correct,
        correct_answer=result.correct_answer,
        updated_score=result.updated_score,
        round_complete=result.round_complete,
        game_complete=result.game_complete,
        session=session_response(result.session),
        next_question=(
            question_response(result.next_question) if result.next_question is not None else None
        ),
    )


def summary_response(summary: GameSummary) -> GameSummaryResponse:
    return GameSummaryResponse(
        session_id=summary.session_id,
        game_id=summary.game_id,
        status=summary.status,
        total_score=summary.total_score,
        total_questions=summary.total_questions,
        correct_answers=summary.correct_answers,
        answered_questions=summary.answered_questions,
        accuracy_percentage=summary.accuracy_percentage,
        total_duration_ms=summary.total_duration_ms,
        personal_best=summary.personal_best,
        rounds=[
            RoundSummaryResponse(
                round_number=round_summary.round_number,
                correct_answers=round_summary.correct_answers,
                total_questions=round_summary.total_questions,
                accuracy_percentage=round_summary.accuracy_percentage,
                duration_ms=round_summary.duration_ms,
            )
            for round_summary in summary.rounds
        ],
    )
