from __future__ import annotations

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.games import Game


class GamesRepo:
    @staticmethod
    async def create(session: AsyncSession, *, game: Game) -> Game:
        session.add(game)
        await session.flush()
        return game

    @staticmethod
    async def get_by_id(session: AsyncSession, game_id: UUID) -> Game | None:
        return await session.get(Game, game_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, game_id: UUID) -> Game | None:
        stmt = select(Game).where(Game.id == game_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_for_host(
        session: AsyncSession,
        *,
        host_id: int,
        status: str | None = None,
        limit: int = 50,
    ) -> list[Game]:
        stmt = select(Game).where(Game.host_id == host_id)
        if status is not None:
            stmt = stmt.where(Game.status == status)
        stmt = stmt.order_by(Game.created_at.desc()).limit(max(1, int(limit)))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def try_claim_generation(
        session: AsyncSession,
        *,
        game_id: UUID,
        now_utc: datetime,
        claim_ttl_seconds: int,
    ) -> bool:
        stale_before = now_utc - timedelta(seconds=max(1, int(claim_ttl_seconds)))
        stmt = (
            update(Game)
            .where(
                Game.id == game_id,
                or_(
                    Game.generation_in_progress.is_(False),
                    Game.generation_claimed_at.is_(None),
                    Game.generation_claimed_at <= stale_before,
                ),
            )
            .values(generation_in_progress=True, generation_claimed_at=now_utc, updated_at=now_utc)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    async def release_generation_claim(
        session: AsyncSession,
        *,
        game_id: UUID,
        claimed_at: datetime,
    ) -> bool:
        stmt = (
            update(Game)
            .where(
                Game.id == game_id,
                Game.generation_in_progress.is_(True),
                Game.generation_claimed_at == claimed_at,
            )
            .values(generation_in_progress=False, generation_claimed_at=None)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    async def set_status(
        session: AsyncSession,
        *,
        game_id: UUID,
        from_statuses: tuple[str, ...],
        to_status: str,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            update(Game)
            .where(Game.id == game_id, Game.status.in_(from_statuses))
            .values(status=to_status, updated_at=now_utc)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)
