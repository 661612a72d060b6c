from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.round_questions import RoundQuestion
from trivia_engine.db.models.rounds import GameRound


class RoundQuestionsRepo:
    @staticmethod
    async def create_many(
        session: AsyncSession,
        *,
        assignments: list[RoundQuestion],
    ) -> list[RoundQuestion]:
        session.add_all(assignments)
        await session.flush()
        return assignments

    @staticmethod
    async def get_by_id(session: AsyncSession, assignment_id: UUID) -> RoundQuestion | None:
        return await session.get(RoundQuestion, assignment_id)

    @staticmethod
    async def get_by_id_for_update(
        session: AsyncSession,
        assignment_id: UUID,
    ) -> RoundQuestion | None:
        stmt = select(RoundQuestion).where(RoundQuestion.id == assignment_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_for_game(session: AsyncSession, *, game_id: UUID) -> list[tuple[int, RoundQuestion]]:
        stmt = (
            select(GameRound.round_number, RoundQuestion)
            .join(GameRound, GameRound.id == RoundQuestion.round_id)
            .where(RoundQuestion.game_id == game_id)
            .order_by(GameRound.round_number.asc(), RoundQuestion.question_order.asc())
        )
        result = await session.execute(stmt)
        return [(int(round_number), assignment) for round_number, assignment in result.all()]

    @staticmethod
    async def list_question_ids_for_game(session: AsyncSession, *, game_id: UUID) -> set[str]:
        stmt = select(RoundQuestion.question_id).where(RoundQuestion.game_id == game_id)
        result = await session.execute(stmt)
        return set(result.scalars().all())

    @staticmethod
    async def get_by_position(
        session: AsyncSession,
        *,
        game_id: UUID,
        round_number: int,
        question_order: int,
    ) -> RoundQuestion | None:
        stmt = (
            select(RoundQuestion)
            .join(GameRound, GameRound.id == RoundQuestion.round_id)
            .where(
                RoundQuestion.game_id == game_id,
                GameRound.round_number == round_number,
                RoundQuestion.question_order == question_order,
            )
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def count_by_round_number(session: AsyncSession, *, game_id: UUID) -> dict[int, int]:
        stmt = (
            select(GameRound.round_number, func.count(RoundQuestion.id))
            .join(RoundQuestion, RoundQuestion.round_id == GameRound.id)
            .where(GameRound.game_id == game_id)
            .group_by(GameRound.round_number)
        )
        result = await session.execute(stmt)
        return {int(round_number): int(total) for round_number, total in result.all()}

    @staticmethod
    async def delete_for_game(session: AsyncSession, *, game_id: UUID) -> int:
        stmt = (
            delete(RoundQuestion)
            .where(RoundQuestion.game_id == game_id)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)
