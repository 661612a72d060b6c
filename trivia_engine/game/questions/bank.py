from __future__ import annotations

from collections.abc import Collection

from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.questions import Question
from trivia_engine.db.repo.questions_repo import ACTIVE_STATUS, QuestionsRepo
from trivia_engine.game.categories import CategorySelection
from trivia_engine.game.errors import CategoryNotFoundError
from trivia_engine.game.questions.types import BankQuestion, CategoryInfo


def to_bank_question(record: Question) -> BankQuestion:
    distractors = tuple(
        value
        for value in (record.distractor_1, record.distractor_2, record.distractor_3)
        if value is not None and value.strip()
    )
    return BankQuestion(
        question_id=record.question_id,
        category=record.category,
        text=record.question_text,
        correct_answer=record.correct_answer,
        distractors=distractors,
    )


def is_active(record: Question) -> bool:
    return record.status == ACTIVE_STATUS


async def list_categories(session: AsyncSession) -> list[CategoryInfo]:
    counts = await QuestionsRepo.count_active_by_category(session)
    return [CategoryInfo(name=name, active_questions=total) for name, total in counts.items()]


async def ensure_categories_exist(session: AsyncSession, *, selection: CategorySelection) -> None:
    counts = await QuestionsRepo.count_active_by_category(session)
    missing = [name for name in selection if name not in counts]
    if missing:
        raise CategoryNotFoundError(", ".join(missing))


async def get_active_pools(
    session: AsyncSession,
    *,
    selection: CategorySelection,
) -> dict[str, list[str]]:
    return await QuestionsRepo.list_active_ids_by_categories(session, categories=selection.names)


async def get_questions_by_ids(
    session: AsyncSession,
    *,
    question_ids: Collection[str],
) -> dict[str, BankQuestion]:
    records = await QuestionsRepo.list_by_ids(session, question_ids=question_ids)
    return {record.question_id: to_bank_question(record) for record in records}
