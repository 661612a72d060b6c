from __future__ import annotations

from collections.abc import Collection, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.questions import Question

ACTIVE_STATUS = "ACTIVE"


class QuestionsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, question_id: str) -> Question | None:
        return await session.get(Question, question_id)

    @staticmethod
    async def list_by_ids(session: AsyncSession, *, question_ids: Collection[str]) -> list[Question]:
        if not question_ids:
            return []
        stmt = select(Question).where(Question.question_id.in_(list(question_ids)))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_active_by_category(
        session: AsyncSession,
        *,
        category: str,
        exclude_question_ids: Collection[str] = (),
        limit: int | None = None,
    ) -> list[Question]:
        stmt = select(Question).where(
            Question.category == category,
            Question.status == ACTIVE_STATUS,
        )
        if exclude_question_ids:
            stmt = stmt.where(Question.question_id.not_in(list(exclude_question_ids)))
        stmt = stmt.order_by(Question.question_id.asc())
        if limit is not None:
            stmt = stmt.limit(max(1, int(limit)))
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_active_ids_by_categories(
        session: AsyncSession,
        *,
        categories: Sequence[str],
    ) -> dict[str, list[str]]:
        pools: dict[str, list[str]] = {category: [] for category in categories}
        if not categories:
            return pools
        stmt = (
            select(Question.category, Question.question_id)
            .where(
                Question.category.in_(list(categories)),
                Question.status == ACTIVE_STATUS,
            )
            .order_by(Question.category.asc(), Question.question_id.asc())
        )
        result = await session.execute(stmt)
        for category, question_id in result.all():
            pools[category].append(question_id)
        return pools

    @staticmethod
    async def count_active_by_category(session: AsyncSession) -> dict[str, int]:
        stmt = (
            select(Question.category, func.count(Question.question_id))
            .where(Question.status == ACTIVE_STATUS)
            .group_by(Question.category)
            .order_by(Question.category.asc())
        )
        result = await session.execute(stmt)
        return {category: int(total) for category, total in result.all()}

    @staticmethod
    async def category_exists(session: AsyncSession, *, category: str) -> bool:
        stmt = select(Question.question_id).where(Question.category == category).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
