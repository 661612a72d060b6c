from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.game_sessions import GameSession


class GameSessionsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, game_session: GameSession) -> GameSession:
        session.add(game_session)
        await session.flush()
        return game_session

    @staticmethod
    async def get_by_id(session: AsyncSession, session_id: UUID) -> GameSession | None:
        return await session.get(GameSession, session_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, session_id: UUID) -> GameSession | None:
        stmt = (
            select(GameSession)
            .where(GameSession.id == session_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_live_for_game(
        session: AsyncSession,
        *,
        game_id: UUID,
        live_statuses: tuple[str, ...],
    ) -> GameSession | None:
        stmt = (
            select(GameSession)
            .where(GameSession.game_id == game_id, GameSession.status.in_(live_statuses))
            .order_by(GameSession.created_at.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def transition_status(
        session: AsyncSession,
        *,
        session_id: UUID,
        from_status: str,
        to_status: str,
    ) -> bool:
        stmt = (
            update(GameSession)
            .where(GameSession.id == session_id, GameSession.status == from_status)
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    async def try_stamp_stats_recorded(
        session: AsyncSession,
        *,
        session_id: UUID,
        recorded_at: datetime,
    ) -> bool:
        stmt = (
            update(GameSession)
            .where(GameSession.id == session_id, GameSession.stats_recorded_at.is_(None))
            .values(stats_recorded_at=recorded_at)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    async def get_best_completed_score(
        session: AsyncSession,
        *,
        user_id: int,
        exclude_session_id: UUID | None = None,
    ) -> int | None:
        stmt = select(func.max(GameSession.total_score)).where(
            GameSession.user_id == user_id,
            GameSession.status == "completed",
        )
        if exclude_session_id is not None:
            stmt = stmt.where(GameSession.id != exclude_session_id)
        result = await session.execute(stmt)
        value = result.scalar_one_or_none()
        return int(value) if value is not None else None

    @staticmethod
    async def list_recent_completed_for_user(
        session: AsyncSession,
        *,
        user_id: int,
        limit: int = 5,
    ) -> list[GameSession]:
        stmt = (
            select(GameSession)
            .where(GameSession.user_id == user_id, GameSession.status == "completed")
            .order_by(GameSession.ended_at.desc())
            .limit(max(1, int(limit)))
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
