from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trivia_engine.db.models.questions import Question
from trivia_engine.game.assignment.service import generate_questions
from trivia_engine.game.assignment.types import GenerationResult
from trivia_engine.game.games.service import create_game
from trivia_engine.game.games.types import GameView
from trivia_engine.game.sessions.service import create_session, start_game
from trivia_engine.game.sessions.types import StartGameResult

UTC = timezone.utc
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
HOST_ID = 101
OTHER_USER_ID = 202


def at(seconds: int) -> datetime:
    return NOW + timedelta(seconds=seconds)


def _fake_question(
    question_id: str,
    *,
    category: str = "History",
    correct_answer: str = "Right",
    distractors: tuple[str | None, str | None, str | None] = ("Wrong 1", "Wrong 2", "Wrong 3"),
    status: str = "ACTIVE",
) -> SimpleNamespace:
    return SimpleNamespace(
        question_id=question_id,
        category=category,
        question_text=f"Question {question_id}?",
        correct_answer=correct_answer,
        distractor_1=distractors[0],
        distractor_2=distractors[1],
        distractor_3=distractors[2],
        status=status,
    )


def answer_for(question_id: str) -> str:
    return f"answer-{question_id}"


async def seed_questions(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    category: str,
    count: int,
    prefix: str | None = None,
    status: str = "ACTIVE",
) -> list[str]:
    prefix = prefix or category.lower()
    question_ids = [f"{prefix}_{index:03d}" for index in range(1, count + 1)]
    async with session_factory.begin() as session:
        session.add_all(
            [
                Question(
                    question_id=question_id,
                    category=category,
                    question_text=f"Question {question_id}?",
                    correct_answer=answer_for(question_id),
                    distractor_1=f"{question_id}-wrong-1",
                    distractor_2=f"{question_id}-wrong-2",
                    distractor_3=f"{question_id}-wrong-3",
                    status=status,
                    created_at=NOW,
                    updated_at=NOW,
                )
                for question_id in question_ids
            ]
        )
    return question_ids


async def create_host_game(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    total_rounds: int,
    questions_per_round: int,
    categories: list[str],
    host_id: int = HOST_ID,
) -> GameView:
    async with session_factory.begin() as session:
        return await create_game(
            session,
            host_id=host_id,
            title="Friday Quiz",
            total_rounds=total_rounds,
            questions_per_round=questions_per_round,
            categories=categories,
            now_utc=NOW,
        )


async def generate(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    game_id: UUID,
    host_id: int = HOST_ID,
    force_regenerate: bool = False,
) -> GenerationResult:
    return await generate_questions(
        session_factory,
        game_id=game_id,
        host_id=host_id,
        force_regenerate=force_regenerate,
        now_utc=NOW,
    )


async def started_game(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    total_rounds: int,
    questions_per_round: int,
    categories: tuple[str, ...] = ("History", "Science"),
    per_category: int = 40,
) -> StartGameResult:
    for category in categories:
        await seed_questions(session_factory, category=category, count=per_category)
    game = await create_host_game(
        session_factory,
        total_rounds=total_rounds,
        questions_per_round=questions_per_round,
        categories=list(categories),
    )
    await generate(session_factory, game_id=game.game_id)
    async with session_factory.begin() as session:
        game_session = await create_session(
            session,
            game_id=game.game_id,
            user_id=HOST_ID,
            now_utc=NOW,
        )
    async with session_factory.begin() as session:
        return await start_game(
            session,
            session_id=game_session.session_id,
            user_id=HOST_ID,
            now_utc=at(1),
        )
