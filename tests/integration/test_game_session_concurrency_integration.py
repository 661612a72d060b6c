from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import func, select

from tests.game.trivia_fixtures import (
    HOST_ID,
    answer_for,
    at,
    create_host_game,
    generate,
    seed_questions,
    started_game,
)
from trivia_engine.db.models.answer_records import AnswerRecord
from trivia_engine.db.models.games import Game
from trivia_engine.db.models.round_questions import RoundQuestion
from trivia_engine.game.errors import AnswerAlreadySubmittedError, GenerationInProgressError
from trivia_engine.game.sessions.service import complete_game, get_session, submit_answer
from trivia_engine.game.stats.service import get_user_stats


@pytest.mark.asyncio
async def test_parallel_submissions_for_same_question_score_once(session_factory) -> None:
    started = await started_game(session_factory, total_rounds=1, questions_per_round=3)
    question = started.first_question
    barrier = asyncio.Event()

    async def _attempt() -> str:
        await barrier.wait()
        try:
            async with session_factory.begin() as session:
                await submit_answer(
                    session,
                    session_id=question.session_id,
                    user_id=HOST_ID,
                    assignment_id=question.assignment_id,
                    user_answer=answer_for(question.question_id),
                    time_to_answer_ms=900,
                    now_utc=at(5),
                )
        except AnswerAlreadySubmittedError:
            return "rejected"
        return "accepted"

    tasks = [asyncio.create_task(_attempt()) for _ in range(5)]
    barrier.set()
    outcomes = await asyncio.gather(*tasks)

    assert sorted(outcomes) == ["accepted"] + ["rejected"] * 4
    async with session_factory() as session:
        view = await get_session(session, session_id=question.session_id, user_id=HOST_ID)
        answered = await session.scalar(
            select(func.count())
            .select_from(AnswerRecord)
            .where(
                AnswerRecord.session_id == question.session_id,
                AnswerRecord.answered_at.is_not(None),
            )
        )
    assert view.total_score == 1
    assert view.current_question_index == 1
    assert answered == 1


@pytest.mark.asyncio
async def test_parallel_generation_requests_produce_one_assignment_set(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=30)
    game = await create_host_game(
        session_factory,
        total_rounds=2,
        questions_per_round=5,
        categories=["History"],
    )
    barrier = asyncio.Event()

    async def _attempt() -> str:
        await barrier.wait()
        try:
            result = await generate(session_factory, game_id=game.game_id)
        except GenerationInProgressError:
            return "in_progress"
        return result.status

    tasks = [asyncio.create_task(_attempt()) for _ in range(4)]
    barrier.set()
    outcomes = await asyncio.gather(*tasks)

    assert outcomes.count("generated") == 1
    assert set(outcomes) <= {"generated", "existing", "in_progress"}
    async with session_factory() as session:
        assigned = await session.scalar(
            select(func.count()).select_from(RoundQuestion).where(RoundQuestion.game_id == game.game_id)
        )
        stored = await session.get(Game, game.game_id)
    assert assigned == 10
    assert stored.generation_in_progress is False


@pytest.mark.asyncio
async def test_parallel_completion_records_stats_once(session_factory) -> None:
    started = await started_game(session_factory, total_rounds=1, questions_per_round=2)
    barrier = asyncio.Event()

    async def _attempt() -> None:
        await barrier.wait()
        async with session_factory.begin() as session:
            await complete_game(
                session,
                session_id=started.session.session_id,
                user_id=HOST_ID,
                now_utc=at(30),
            )

    tasks = [asyncio.create_task(_attempt()) for _ in range(3)]
    barrier.set()
    await asyncio.gather(*tasks)

    async with session_factory() as session:
        stats = await get_user_stats(session, user_id=HOST_ID)
    assert stats.games_completed == 1
    assert stats.games_hosted == 1
