from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.game_sessions import GameSession
from trivia_engine.db.repo.game_sessions_repo import GameSessionsRepo
from trivia_engine.game.constants import (
    GAME_STATUS_SETUP,
    SESSION_LIVE_STATUSES,
    SESSION_STATUS_SETUP,
)
from trivia_engine.game.errors import InvalidTransitionError, SessionAlreadyActiveError
from trivia_engine.game.games.service import load_host_game
from trivia_engine.game.sessions.types import SessionView

from .internal import _to_session_view

logger = structlog.get_logger(__name__)


async def create_session(
    session: AsyncSession,
    *,
    game_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> SessionView:
    game = await load_host_game(session, game_id=game_id, host_id=user_id, for_update=True)
    if game.status != GAME_STATUS_SETUP:
        raise InvalidTransitionError(f"game is {game.status}")

    live_session = await GameSessionsRepo.get_live_for_game(
        session,
        game_id=game.id,
        live_statuses=SESSION_LIVE_STATUSES,
    )
    if live_session is not None:
        raise SessionAlreadyActiveError

    game_session = await GameSessionsRepo.create(
        session,
        game_session=GameSession(
            id=uuid4(),
            game_id=game.id,
            user_id=user_id,
            status=SESSION_STATUS_SETUP,
            total_rounds=game.total_rounds,
            questions_per_round=game.questions_per_round,
            current_round=1,
            current_question_index=0,
            total_score=0,
            paused_ms=0,
            created_at=now_utc,
        ),
    )
    logger.info(
        "game_session_created",
        session_id=str(game_session.id),
        game_id=str(game.id),
        user_id=user_id,
    )
    return _to_session_view(game_session)
