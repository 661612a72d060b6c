from __future__ import annotations

import pytest

from tests.game.trivia_fixtures import HOST_ID, OTHER_USER_ID, answer_for, at, started_game
from trivia_engine.db.repo.game_sessions_repo import GameSessionsRepo
from trivia_engine.game.sessions.service import pause_game, resume_game, submit_answer
from trivia_engine.game.stats.service import get_user_stats, record_completed_session


async def _play_through(session_factory, started, *, wrong_positions=()) -> None:  # noqa: ANN001
    question = started.first_question
    position = 0
    while question is not None:
        position += 1
        correct = position not in wrong_positions
        async with session_factory.begin() as session:
            result = await submit_answer(
                session,
                session_id=question.session_id,
                user_id=HOST_ID,
                assignment_id=question.assignment_id,
                user_answer=answer_for(question.question_id) if correct else "nope",
                time_to_answer_ms=1500,
                now_utc=at(position * 10 + 1),
            )
        question = result.next_question


@pytest.mark.asyncio
async def test_user_without_games_gets_zeroed_stats(session_factory) -> None:
    async with session_factory() as session:
        stats = await get_user_stats(session, user_id=OTHER_USER_ID)

    assert stats.games_completed == 0
    assert stats.average_accuracy == 0.0
    assert stats.favorite_category is None
    assert stats.recent_games == []


@pytest.mark.asyncio
async def test_completed_game_rolls_into_lifetime_stats(session_factory) -> None:
    started = await started_game(session_factory, total_rounds=1, questions_per_round=4)
    async with session_factory.begin() as session:
        await pause_game(session, session_id=started.session.session_id, user_id=HOST_ID, now_utc=at(2))
    async with session_factory.begin() as session:
        await resume_game(session, session_id=started.session.session_id, user_id=HOST_ID, now_utc=at(6))

    await _play_through(session_factory, started, wrong_positions=(2,))

    async with session_factory() as session:
        stats = await get_user_stats(session, user_id=HOST_ID)

    assert stats.games_completed == 1
    assert stats.total_score == 3
    assert stats.best_score == 3
    assert stats.correct_answers == 3
    assert stats.questions_answered == 4
    assert stats.average_accuracy == 75.0
    # Finished at at(41) after starting at at(1) with four seconds paused.
    assert stats.total_play_ms == 36_000
    assert stats.favorite_category == "History"
    assert [game.session_id for game in stats.recent_games] == [started.session.session_id]


@pytest.mark.asyncio
async def test_record_completed_session_is_idempotent(session_factory) -> None:
    started = await started_game(session_factory, total_rounds=1, questions_per_round=2)
    await _play_through(session_factory, started)

    async with session_factory.begin() as session:
        game_session = await GameSessionsRepo.get_by_id(session, started.session.session_id)
        recorded = await record_completed_session(session, game_session=game_session, now_utc=at(99))

    assert recorded is False
    async with session_factory() as session:
        stats = await get_user_stats(session, user_id=HOST_ID)
    assert stats.games_completed == 1
    assert stats.questions_answered == 2


@pytest.mark.asyncio
async def test_record_completed_session_ignores_live_sessions(session_factory) -> None:
    started = await started_game(session_factory, total_rounds=1, questions_per_round=2)

    async with session_factory.begin() as session:
        game_session = await GameSessionsRepo.get_by_id(session, started.session.session_id)
        recorded = await record_completed_session(session, game_session=game_session, now_utc=at(5))

    assert recorded is False
    async with session_factory() as session:
        stats = await get_user_stats(session, user_id=HOST_ID)
    assert stats.games_completed == 0
