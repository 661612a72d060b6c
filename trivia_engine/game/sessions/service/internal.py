from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.core.time import elapsed_ms
from trivia_engine.db.models.game_sessions import GameSession
from trivia_engine.db.repo.game_sessions_repo import GameSessionsRepo
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.db.repo.questions_repo import QuestionsRepo
from trivia_engine.db.repo.round_questions_repo import RoundQuestionsRepo
from trivia_engine.game.constants import (
    GAME_STATUS_COMPLETED,
    GAME_STATUS_IN_PROGRESS,
    SESSION_STATUS_COMPLETED,
)
from trivia_engine.game.errors import (
    AssignmentNotFoundError,
    AuthorizationError,
    InvalidTransitionError,
    SessionNotFoundError,
)
from trivia_engine.game.questions.bank import to_bank_question
from trivia_engine.game.questions.presentation import shuffled_answers
from trivia_engine.game.sessions.state_machine import SessionStateMachine
from trivia_engine.game.sessions.types import QuestionView, SessionView
from trivia_engine.game.stats.service import record_completed_session

logger = structlog.get_logger(__name__)


def _to_session_view(game_session: GameSession) -> SessionView:
    return SessionView(
        session_id=game_session.id,
        game_id=game_session.game_id,
        user_id=game_session.user_id,
        status=game_session.status,
        total_rounds=game_session.total_rounds,
        questions_per_round=game_session.questions_per_round,
        current_round=game_session.current_round,
        current_question_index=game_session.current_question_index,
        total_score=game_session.total_score,
        started_at=game_session.started_at,
        ended_at=game_session.ended_at,
        paused_ms=game_session.paused_ms,
        total_duration_ms=game_session.total_duration_ms,
    )


async def _load_owned_session(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
    for_update: bool = False,
) -> GameSession:
    if for_update:
        game_session = await GameSessionsRepo.get_by_id_for_update(session, session_id)
    else:
        game_session = await GameSessionsRepo.get_by_id(session, session_id)
    if game_session is None:
        raise SessionNotFoundError
    if game_session.user_id != user_id:
        raise AuthorizationError
    return game_session


async def _build_question_view(
    session: AsyncSession,
    *,
    game_session: GameSession,
) -> QuestionView:
    round_number = game_session.current_round
    question_order = game_session.current_question_index + 1
    assignment = await RoundQuestionsRepo.get_by_position(
        session,
        game_id=game_session.game_id,
        round_number=round_number,
        question_order=question_order,
    )
    if assignment is None:
        raise AssignmentNotFoundError
    record = await QuestionsRepo.get_by_id(session, assignment.question_id)
    if record is None:
        raise AssignmentNotFoundError
    question = to_bank_question(record)
    return QuestionView(
        session_id=game_session.id,
        assignment_id=assignment.id,
        question_id=question.question_id,
        prompt=question.text,
        category=question.category,
        round_number=round_number,
        question_number=question_order,
        overall_question_number=(round_number - 1) * game_session.questions_per_round + question_order,
        total_questions=game_session.total_rounds * game_session.questions_per_round,
        answers=shuffled_answers(question, assignment_id=assignment.id),
    )


async def _transition(
    session: AsyncSession,
    *,
    game_session: GameSession,
    to_status: str,
) -> None:
    from_status = game_session.status
    SessionStateMachine.ensure_transition(from_status, to_status)
    moved = await GameSessionsRepo.transition_status(
        session,
        session_id=game_session.id,
        from_status=from_status,
        to_status=to_status,
    )
    if not moved:
        raise InvalidTransitionError(f"{from_status} -> {to_status}")
    game_session.status = to_status


def _close_pause_window(game_session: GameSession, *, now_utc: datetime) -> None:
    if game_session.paused_at is None:
        return
    game_session.paused_ms += elapsed_ms(start=game_session.paused_at, end=now_utc)
    game_session.paused_at = None


async def _record_stats_safely(
    session: AsyncSession,
    *,
    game_session: GameSession,
    now_utc: datetime,
) -> None:
    try:
        async with session.begin_nested():
            await record_completed_session(session, game_session=game_session, now_utc=now_utc)
    except Exception:
        logger.exception(
            "session_stats_rollup_failed",
            session_id=str(game_session.id),
            user_id=game_session.user_id,
        )


async def _finish_session(
    session: AsyncSession,
    *,
    game_session: GameSession,
    now_utc: datetime,
) -> None:
    """Moves a live session to completed and rolls it into stats once."""
    await _transition(session, game_session=game_session, to_status=SESSION_STATUS_COMPLETED)
    _close_pause_window(game_session, now_utc=now_utc)
    game_session.ended_at = now_utc
    if game_session.started_at is not None:
        game_session.total_duration_ms = elapsed_ms(start=game_session.started_at, end=now_utc)
    else:
        game_session.total_duration_ms = 0
    await GamesRepo.set_status(
        session,
        game_id=game_session.game_id,
        from_statuses=(GAME_STATUS_IN_PROGRESS,),
        to_status=GAME_STATUS_COMPLETED,
        now_utc=now_utc,
    )
    await session.flush()
    logger.info(
        "game_session_completed",
        session_id=str(game_session.id),
        game_id=str(game_session.game_id),
        user_id=game_session.user_id,
        total_score=game_session.total_score,
        total_duration_ms=game_session.total_duration_ms,
    )
    await _record_stats_safely(session, game_session=game_session, now_utc=now_utc)
