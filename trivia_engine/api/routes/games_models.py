from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from trivia_engine.game.assignment.types import GenerationResult, RoundPreview
from trivia_engine.game.games.types import GameView
from trivia_engine.game.replacement.types import ReplacementOption, ReplacementResult


class CreateGameRequest(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    total_rounds: int
    questions_per_round: int
    categories: list[str]


class GameResponse(BaseModel):
    game_id: UUID
    host_id: int
    title: str
    total_rounds: int
    questions_per_round: int
    total_questions: int
    categories: list[str]
    status: str
    created_at: datetime


class GenerateQuestionsRequest(BaseModel):
    force_regenerate: bool = False


class AssignedQuestionResponse(BaseModel):
    assignment_id: UUID
    question_id: str
    question_order: int
    category: str
    text: str
    correct_answer: str


class RoundResponse(BaseModel):
    round_number: int
    questions: list[AssignedQuestionResponse]


class GenerationResponse(BaseModel):
    success: bool
    status: str
    per_category_counts: dict[str, int]
    drawn_by_category: dict[str, int]
    duplicates_found: int = Field(ge=0)
    duplicate_rounds: list[int]
    rounds: list[RoundResponse]


class ReplacementOptionResponse(BaseModel):
    question_id: str
    category: str
    text: str
    correct_answer: str
    previously_used: bool


class ReplaceQuestionRequest(BaseModel):
    new_question_id: str = Field(min_length=1, max_length=64)


class ReplacementResponse(BaseModel):
    assignment_id: UUID
    game_id: UUID
    round_number: int
    question_order: int
    previous_question_id: str
    question_id: str
    category: str
    text: str


def game_response(view: GameView) -> GameResponse:
    return GameResponse(
        game_id=view.game_id,
        host_id=view.host_id,
        title=view.title,
        total_rounds=view.total_rounds,
        questions_per_round=view.questions_per_round,
        total_questions=view.total_questions,
        categories=list(view.categories),
        status=view.status,
        created_at=view.created_at,
    )


def round_responses(rounds: list[RoundPreview]) -> list[RoundResponse]:
    return [
        RoundResponse(
            round_number=preview.round_number,
            questions=[
                AssignedQuestionResponse(
                    assignment_id=question.assignment_id,
                    question_id=question.question_id,
                    question_order=question.question_order,
                    category=question.category,
                    text=question.text,
                    correct_answer=question.correct_answer,
                )
                for question in preview.questions
            ],
        )
        for preview in rounds
    ]


def generation_response(result: GenerationResult) -> GenerationResponse:
    return GenerationResponse(
        success=result.success,
        status=result.status,
        per_category_counts=result.per_category_counts,
        drawn_by_category=result.drawn_by_category,
        duplicates_found=result.duplicates_found,
        duplicate_rounds=result.duplicate_rounds,
        rounds=round_responses(result.rounds),
    )


def replacement_option_responses(options: list[ReplacementOption]) -> list[ReplacementOptionResponse]:
    return [
        ReplacementOptionResponse(
            question_id=option.question_id,
            category=option.category,
            text=option.text,
            correct_answer=option.correct_answer,
            previously_used=option.previously_used,
        )
        for option in options
    ]


def replacement_response(result: ReplacementResult) -> ReplacementResponse:
    return ReplacementResponse(
        assignment_id=result.assignment_id,
        game_id=result.game_id,
        round_number=result.round_number,
        question_order=result.question_order,
        previous_question_id=result.previous_question_id,
        question_id=result.question_id,
        category=result.category,
        text=result.text,
    )
