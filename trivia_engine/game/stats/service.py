from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.game_sessions import GameSession
from trivia_engine.db.repo.answer_records_repo import AnswerRecordsRepo
from trivia_engine.db.repo.game_sessions_repo import GameSessionsRepo
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.db.repo.player_stats_repo import PlayerStatsRepo
from trivia_engine.game.constants import SESSION_STATUS_COMPLETED
from trivia_engine.game.stats.types import RecentGame, UserStats

logger = structlog.get_logger(__name__)

RECENT_GAMES_LIMIT = 5


def _accuracy(correct: int, answered: int) -> float:
    if answered <= 0:
        return 0.0
    return round(correct * 100.0 / answered, 2)


async def record_completed_session(
    session: AsyncSession,
    *,
    game_session: GameSession,
    now_utc: datetime,
) -> bool:
    """Folds a completed session into lifetime stats; returns False when already recorded."""
    if game_session.status != SESSION_STATUS_COMPLETED:
        return False
    stamped = await GameSessionsRepo.try_stamp_stats_recorded(
        session,
        session_id=game_session.id,
        recorded_at=now_utc,
    )
    if not stamped:
        return False

    records = await AnswerRecordsRepo.list_for_session(session, session_id=game_session.id)
    answered = sum(1 for record in records if record.answered_at is not None)
    correct = sum(1 for record in records if record.is_correct)
    play_ms = max(0, (game_session.total_duration_ms or 0) - game_session.paused_ms)

    await PlayerStatsRepo.ensure_row(session, user_id=game_session.user_id, now_utc=now_utc)
    await PlayerStatsRepo.apply_completed_game(
        session,
        user_id=game_session.user_id,
        score=game_session.total_score,
        correct_answers=correct,
        questions_answered=answered,
        play_ms=play_ms,
        completed_at=now_utc,
    )

    game = await GamesRepo.get_by_id(session, game_session.game_id)
    if game is not None:
        await PlayerStatsRepo.ensure_row(session, user_id=game.host_id, now_utc=now_utc)
        await PlayerStatsRepo.increment_games_hosted(session, user_id=game.host_id, now_utc=now_utc)

    logger.info(
        "session_stats_recorded",
        session_id=str(game_session.id),
        user_id=game_session.user_id,
        score=game_session.total_score,
        correct_answers=correct,
        questions_answered=answered,
    )
    return True


async def get_user_stats(session: AsyncSession, *, user_id: int) -> UserStats:
    stats = await PlayerStatsRepo.get_by_user_id(session, user_id)
    by_category = await AnswerRecordsRepo.count_answered_by_category_for_user(session, user_id=user_id)
    # Ties resolve to the alphabetically first category.
    favorite_category = max(by_category, key=by_category.__getitem__) if by_category else None
    recent = await GameSessionsRepo.list_recent_completed_for_user(
        session,
        user_id=user_id,
        limit=RECENT_GAMES_LIMIT,
    )
    recent_games = [
        RecentGame(
            session_id=game_session.id,
            game_id=game_session.game_id,
            total_score=game_session.total_score,
            ended_at=game_session.ended_at,
        )
        for game_session in recent
    ]

    if stats is None:
        return UserStats(
            user_id=user_id,
            games_completed=0,
            games_hosted=0,
            total_score=0,
            best_score=0,
            correct_answers=0,
            questions_answered=0,
            average_accuracy=0.0,
            total_play_ms=0,
            favorite_category=favorite_category,
            recent_games=recent_games,
        )
    return UserStats(
        user_id=user_id,
        games_completed=stats.games_completed,
        games_hosted=stats.games_hosted,
        total_score=stats.total_score,
        best_score=stats.best_score,
        correct_answers=stats.correct_answers,
        questions_answered=stats.questions_answered,
        average_accuracy=_accuracy(stats.correct_answers, stats.questions_answered),
        total_play_ms=stats.total_play_ms,
        favorite_category=favorite_category,
        last_completed_at=stats.last_completed_at,
        recent_games=recent_games,
    )
