from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.repo.used_questions_repo import UsedQuestionsRepo

logger = structlog.get_logger(__name__)


async def used_question_ids(
    session: AsyncSession,
    *,
    host_id: int,
    question_ids: Collection[str] | None = None,
) -> set[str]:
    return await UsedQuestionsRepo.list_question_ids_for_host(
        session,
        host_id=host_id,
        question_ids=question_ids,
    )


async def mark_used(
    session: AsyncSession,
    *,
    host_id: int,
    question_ids: Collection[str],
    now_utc: datetime,
) -> int:
    inserted = await UsedQuestionsRepo.mark_used(
        session,
        host_id=host_id,
        question_ids=question_ids,
        used_at=now_utc,
    )
    logger.debug(
        "used_questions_marked",
        host_id=host_id,
        requested=len(question_ids),
        inserted=inserted,
    )
    return inserted
