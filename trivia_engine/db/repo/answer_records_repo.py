from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.answer_records import AnswerRecord
from trivia_engine.db.models.game_sessions import GameSession
from trivia_engine.db.models.questions import Question


class AnswerRecordsRepo:
    @staticmethod
    async def create_many(session: AsyncSession, *, records: list[AnswerRecord]) -> list[AnswerRecord]:
        session.add_all(records)
        await session.flush()
        return records

    @staticmethod
    async def try_close(
        session: AsyncSession,
        *,
        session_id: UUID,
        round_question_id: UUID,
        user_answer: str,
        is_correct: bool,
        time_to_answer_ms: int,
        answered_at: datetime,
    ) -> bool:
        stmt = (
            update(AnswerRecord)
            .where(
                AnswerRecord.session_id == session_id,
                AnswerRecord.round_question_id == round_question_id,
                AnswerRecord.answered_at.is_(None),
            )
            .values(
                user_answer=user_answer,
                is_correct=is_correct,
                time_to_answer_ms=time_to_answer_ms,
                answered_at=answered_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    async def count_correct(session: AsyncSession, *, session_id: UUID) -> int:
        stmt = select(func.count(AnswerRecord.id)).where(
            AnswerRecord.session_id == session_id,
            AnswerRecord.is_correct.is_(True),
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def list_for_session(session: AsyncSession, *, session_id: UUID) -> list[AnswerRecord]:
        stmt = (
            select(AnswerRecord)
            .where(AnswerRecord.session_id == session_id)
            .order_by(AnswerRecord.round_number.asc(), AnswerRecord.question_order.asc())
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def count_answered_by_category_for_user(
        session: AsyncSession,
        *,
        user_id: int,
    ) -> dict[str, int]:
        stmt = (
            select(Question.category, func.count(AnswerRecord.id))
            .join(Question, Question.question_id == AnswerRecord.question_id)
            .join(GameSession, GameSession.id == AnswerRecord.session_id)
            .where(
                GameSession.user_id == user_id,
                GameSession.status == "completed",
                AnswerRecord.answered_at.is_not(None),
            )
            .group_by(Question.category)
            .order_by(Question.category.asc())
        )
        result = await session.execute(stmt)
        return {category: int(total) for category, total in result.all()}

    @staticmethod
    async def count_answered_in_round(
        session: AsyncSession,
        *,
        session_id: UUID,
        round_number: int,
    ) -> int:
        stmt = select(func.count(AnswerRecord.id)).where(
            AnswerRecord.session_id == session_id,
            AnswerRecord.round_number == round_number,
            AnswerRecord.answered_at.is_not(None),
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)
