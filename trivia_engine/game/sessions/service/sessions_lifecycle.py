from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.core.time import elapsed_ms
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.game.constants import (
    GAME_STATUS_CANCELLED,
    GAME_STATUS_IN_PROGRESS,
    SESSION_STATUS_CANCELLED,
    SESSION_STATUS_COMPLETED,
    SESSION_STATUS_IN_PROGRESS,
    SESSION_STATUS_PAUSED,
)
from trivia_engine.game.errors import InvalidTransitionError
from trivia_engine.game.sessions.types import GameSummary, QuestionView, SessionView

from .internal import (
    _build_question_view,
    _close_pause_window,
    _finish_session,
    _load_owned_session,
    _to_session_view,
    _transition,
)
from .sessions_queries import build_game_summary

logger = structlog.get_logger(__name__)


async def pause_game(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> SessionView:
    game_session = await _load_owned_session(
        session,
        session_id=session_id,
        user_id=user_id,
        for_update=True,
    )
    await _transition(session, game_session=game_session, to_status=SESSION_STATUS_PAUSED)
    game_session.paused_at = now_utc
    await session.flush()
    logger.info("game_session_paused", session_id=str(game_session.id), user_id=user_id)
    return _to_session_view(game_session)


async def resume_game(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> QuestionView:
    game_session = await _load_owned_session(
        session,
        session_id=session_id,
        user_id=user_id,
        for_update=True,
    )
    if game_session.status != SESSION_STATUS_PAUSED:
        raise InvalidTransitionError(f"{game_session.status} -> {SESSION_STATUS_IN_PROGRESS}")
    await _transition(session, game_session=game_session, to_status=SESSION_STATUS_IN_PROGRESS)
    _close_pause_window(game_session, now_utc=now_utc)
    await session.flush()
    logger.info(
        "game_session_resumed",
        session_id=str(game_session.id),
        user_id=user_id,
        paused_ms=game_session.paused_ms,
    )
    return await _build_question_view(session, game_session=game_session)


async def complete_game(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> GameSummary:
    game_session = await _load_owned_session(
        session,
        session_id=session_id,
        user_id=user_id,
        for_update=True,
    )
    if game_session.status != SESSION_STATUS_COMPLETED:
        await _finish_session(session, game_session=game_session, now_utc=now_utc)
    return await build_game_summary(session, game_session=game_session)


async def cancel_game(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> SessionView:
    game_session = await _load_owned_session(
        session,
        session_id=session_id,
        user_id=user_id,
        for_update=True,
    )
    await _transition(session, game_session=game_session, to_status=SESSION_STATUS_CANCELLED)
    _close_pause_window(game_session, now_utc=now_utc)
    game_session.ended_at = now_utc
    if game_session.started_at is not None:
        game_session.total_duration_ms = elapsed_ms(start=game_session.started_at, end=now_utc)
        await GamesRepo.set_status(
            session,
            game_id=game_session.game_id,
            from_statuses=(GAME_STATUS_IN_PROGRESS,),
            to_status=GAME_STATUS_CANCELLED,
            now_utc=now_utc,
        )
    await session.flush()
    logger.info(
        "game_session_cancelled",
        session_id=str(game_session.id),
        user_id=user_id,
        started=game_session.started_at is not None,
    )
    return _to_session_view(game_session)
