from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.rounds import GameRound


class GameRoundsRepo:
    @staticmethod
    async def create_many(session: AsyncSession, *, rounds: list[GameRound]) -> list[GameRound]:
        session.add_all(rounds)
        await session.flush()
        return rounds

    @staticmethod
    async def get_by_id(session: AsyncSession, round_id: UUID) -> GameRound | None:
        return await session.get(GameRound, round_id)

    @staticmethod
    async def list_for_game(session: AsyncSession, *, game_id: UUID) -> list[GameRound]:
        stmt = (
            select(GameRound)
            .where(GameRound.game_id == game_id)
            .order_by(GameRound.round_number.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def set_status(
        session: AsyncSession,
        *,
        game_id: UUID,
        round_number: int,
        status: str,
    ) -> bool:
        stmt = (
            update(GameRound)
            .where(GameRound.game_id == game_id, GameRound.round_number == round_number)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    async def delete_for_game(session: AsyncSession, *, game_id: UUID) -> int:
        stmt = (
            delete(GameRound)
            .where(GameRound.game_id == game_id)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)
