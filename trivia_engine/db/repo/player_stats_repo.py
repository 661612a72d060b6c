from __future__ import annotations

from datetime import datetime

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.player_stats import PlayerStats
from trivia_engine.db.repo.dialect_insert import insert_for


class PlayerStatsRepo:
    @staticmethod
    async def get_by_user_id(session: AsyncSession, user_id: int) -> PlayerStats | None:
        stmt = (
            select(PlayerStats)
            .where(PlayerStats.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def ensure_row(session: AsyncSession, *, user_id: int, now_utc: datetime) -> None:
        stmt = (
            insert_for(session, PlayerStats)
            .values(user_id=user_id, updated_at=now_utc)
            .on_conflict_do_nothing(index_elements=[PlayerStats.user_id])
        )
        await session.execute(stmt)

    @staticmethod
    async def apply_completed_game(
        session: AsyncSession,
        *,
        user_id: int,
        score: int,
        correct_answers: int,
        questions_answered: int,
        play_ms: int,
        completed_at: datetime,
    ) -> None:
        stmt = (
            update(PlayerStats)
            .where(PlayerStats.user_id == user_id)
            .values(
                games_completed=PlayerStats.games_completed + 1,
                total_score=PlayerStats.total_score + score,
                best_score=case(
                    (PlayerStats.best_score < score, score),
                    else_=PlayerStats.best_score,
                ),
                correct_answers=PlayerStats.correct_answers + correct_answers,
                questions_answered=PlayerStats.questions_answered + questions_answered,
                total_play_ms=PlayerStats.total_play_ms + play_ms,
                last_completed_at=completed_at,
                updated_at=completed_at,
            )
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)

    @staticmethod
    async def increment_games_hosted(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
    ) -> None:
        stmt = (
            update(PlayerStats)
            .where(PlayerStats.user_id == user_id)
            .values(games_hosted=PlayerStats.games_hosted + 1, updated_at=now_utc)
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)
