from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.used_questions import HostUsedQuestion
from trivia_engine.db.repo.dialect_insert import insert_for


class UsedQuestionsRepo:
    @staticmethod
    async def list_question_ids_for_host(
        session: AsyncSession,
        *,
        host_id: int,
        question_ids: Collection[str] | None = None,
    ) -> set[str]:
        stmt = select(HostUsedQuestion.question_id).where(HostUsedQuestion.host_id == host_id)
        if question_ids is not None:
            if not question_ids:
                return set()
            stmt = stmt.where(HostUsedQuestion.question_id.in_(list(question_ids)))
        result = await session.execute(stmt)
        return set(result.scalars().all())

    @staticmethod
    async def mark_used(
        session: AsyncSession,
        *,
        host_id: int,
        question_ids: Collection[str],
        used_at: datetime,
    ) -> int:
        unique_ids = sorted(set(question_ids))
        if not unique_ids:
            return 0
        stmt = (
            insert_for(session, HostUsedQuestion)
            .values(
                [
                    {"host_id": host_id, "question_id": question_id, "first_used_at": used_at}
                    for question_id in unique_ids
                ]
            )
            .on_conflict_do_nothing(
                index_elements=[HostUsedQuestion.host_id, HostUsedQuestion.question_id]
            )
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)
