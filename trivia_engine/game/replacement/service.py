from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.db.repo.questions_repo import QuestionsRepo
from trivia_engine.db.repo.round_questions_repo import RoundQuestionsRepo
from trivia_engine.db.repo.rounds_repo import GameRoundsRepo
from trivia_engine.game.constants import GAME_STATUS_SETUP
from trivia_engine.game.errors import (
    AssignmentNotFoundError,
    AuthorizationError,
    CategoryNotFoundError,
    DuplicateQuestionError,
    GameNotEditableError,
    GameNotFoundError,
    QuestionNotFoundError,
    ReplacementCategoryMismatchError,
    ValidationError,
)
from trivia_engine.game.questions import ledger
from trivia_engine.game.questions.bank import is_active
from trivia_engine.game.replacement.types import ReplacementOption, ReplacementResult

logger = structlog.get_logger(__name__)


async def get_replacement_options(
    session: AsyncSession,
    *,
    game_id: UUID,
    question_id: str,
    category: str,
    limit: int,
    host_id: int | None = None,
) -> list[ReplacementOption]:
    if limit < 1:
        raise ValidationError("limit must be positive")
    game = await GamesRepo.get_by_id(session, game_id)
    if game is None:
        raise GameNotFoundError
    if host_id is not None and game.host_id != host_id:
        raise AuthorizationError

    if not await QuestionsRepo.category_exists(session, category=category):
        raise CategoryNotFoundError(category)

    excluded = await RoundQuestionsRepo.list_question_ids_for_game(session, game_id=game.id)
    excluded.add(question_id)
    candidates = await QuestionsRepo.list_active_by_category(
        session,
        category=category,
        exclude_question_ids=excluded,
    )
    if not candidates:
        return []

    used_ids = await ledger.used_question_ids(
        session,
        host_id=game.host_id,
        question_ids=[candidate.question_id for candidate in candidates],
    )
    # Stable sort keeps question_id order inside each group.
    candidates.sort(key=lambda candidate: candidate.question_id in used_ids)
    return [
        ReplacementOption(
            question_id=candidate.question_id,
            category=candidate.category,
            text=candidate.question_text,
            correct_answer=candidate.correct_answer,
            previously_used=candidate.question_id in used_ids,
        )
        for candidate in candidates[:limit]
    ]


async def replace_question(
    session: AsyncSession,
    *,
    assignment_id: UUID,
    new_question_id: str,
    host_id: int,
    now_utc: datetime,
) -> ReplacementResult:
    assignment = await RoundQuestionsRepo.get_by_id_for_update(session, assignment_id)
    if assignment is None:
        raise AssignmentNotFoundError

    game = await GamesRepo.get_by_id_for_update(session, assignment.game_id)
    if game is None:
        raise GameNotFoundError
    if game.host_id != host_id:
        raise AuthorizationError
    if game.status != GAME_STATUS_SETUP:
        raise GameNotEditableError

    new_question = await QuestionsRepo.get_by_id(session, new_question_id)
    if new_question is None or not is_active(new_question):
        raise QuestionNotFoundError
    current_question = await QuestionsRepo.get_by_id(session, assignment.question_id)
    if current_question is not None and current_question.category != new_question.category:
        raise ReplacementCategoryMismatchError(
            f"expected category {current_question.category}, got {new_question.category}"
        )

    assigned_ids = await RoundQuestionsRepo.list_question_ids_for_game(session, game_id=game.id)
    if new_question_id in assigned_ids:
        raise DuplicateQuestionError

    previous_question_id = assignment.question_id
    assignment.question_id = new_question_id
    game.updated_at = now_utc
    await session.flush()
    await ledger.mark_used(
        session,
        host_id=game.host_id,
        question_ids=[new_question_id],
        now_utc=now_utc,
    )

    game_round = await GameRoundsRepo.get_by_id(session, assignment.round_id)
    logger.info(
        "question_replaced",
        game_id=str(game.id),
        assignment_id=str(assignment.id),
        previous_question_id=previous_question_id,
        question_id=new_question_id,
    )
    return ReplacementResult(
        assignment_id=assignment.id,
        game_id=game.id,
        round_number=game_round.round_number if game_round is not None else 0,
        question_order=assignment.question_order,
        previous_question_id=previous_question_id,
        question_id=new_question_id,
        category=new_question.category,
        text=new_question.question_text,
    )
