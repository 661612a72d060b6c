from __future__ import annotations

import pytest

from tests.game.trivia_fixtures import (
    HOST_ID,
    NOW,
    OTHER_USER_ID,
    at,
    create_host_game,
    generate,
    seed_questions,
)
from trivia_engine.db.models.games import Game
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.db.repo.round_questions_repo import RoundQuestionsRepo
from trivia_engine.game.assignment.service import list_game_rounds
from trivia_engine.game.errors import (
    AuthorizationError,
    GenerationInProgressError,
    InsufficientPoolError,
)
from trivia_engine.game.questions import ledger


def _question_ids(result) -> list[str]:  # noqa: ANN001
    return [question.question_id for preview in result.rounds for question in preview.questions]


@pytest.mark.asyncio
async def test_generate_questions_fills_every_round_without_repeats(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=40)
    await seed_questions(session_factory, category="Science", count=40)
    await seed_questions(session_factory, category="Sports", count=40)
    game = await create_host_game(
        session_factory,
        total_rounds=3,
        questions_per_round=10,
        categories=["History", "Science", "Sports"],
    )

    result = await generate(session_factory, game_id=game.game_id)

    assert result.success is True
    assert result.status == "generated"
    assert result.per_category_counts == {"History": 10, "Science": 10, "Sports": 10}
    assert result.drawn_by_category == result.per_category_counts
    assert result.duplicates_found == 0
    assert [preview.round_number for preview in result.rounds] == [1, 2, 3]
    assert all(len(preview.questions) == 10 for preview in result.rounds)
    assert all(
        [question.question_order for question in preview.questions] == list(range(1, 11))
        for preview in result.rounds
    )
    question_ids = _question_ids(result)
    assert len(question_ids) == len(set(question_ids)) == 30

    async with session_factory() as session:
        used = await ledger.used_question_ids(session, host_id=HOST_ID)
    assert used == set(question_ids)


@pytest.mark.asyncio
async def test_generate_questions_returns_existing_set_without_changes(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=20)
    game = await create_host_game(
        session_factory,
        total_rounds=2,
        questions_per_round=5,
        categories=["History"],
    )
    first = await generate(session_factory, game_id=game.game_id)

    second = await generate(session_factory, game_id=game.game_id)

    assert second.status == "existing"
    assert _question_ids(second) == _question_ids(first)
    assert second.drawn_by_category == {"History": 10}


@pytest.mark.asyncio
async def test_force_regenerate_replaces_set_preferring_unused_questions(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=40)
    await seed_questions(session_factory, category="Science", count=40)
    game = await create_host_game(
        session_factory,
        total_rounds=2,
        questions_per_round=5,
        categories=["History", "Science"],
    )
    first = await generate(session_factory, game_id=game.game_id)

    second = await generate(session_factory, game_id=game.game_id, force_regenerate=True)

    assert second.status == "regenerated"
    assert second.duplicates_found == 0
    assert len(_question_ids(second)) == 10
    assert set(_question_ids(first)).isdisjoint(_question_ids(second))
    async with session_factory() as session:
        counts = await RoundQuestionsRepo.count_by_round_number(session, game_id=game.game_id)
    assert counts == {1: 5, 2: 5}


@pytest.mark.asyncio
async def test_generate_questions_reports_shortfall_and_writes_nothing(session_factory) -> None:
    await seed_questions(session_factory, category="Rare", count=50)
    await seed_questions(session_factory, category="History", count=5)
    game = await create_host_game(
        session_factory,
        total_rounds=10,
        questions_per_round=20,
        categories=["Rare"],
    )

    with pytest.raises(InsufficientPoolError) as exc_info:
        await generate(session_factory, game_id=game.game_id)

    error = exc_info.value
    assert error.shortfall == 150
    assert error.needed == 200
    assert error.available_by_category == {"Rare": 50}
    assert {suggestion.code: suggestion.value for suggestion in error.suggestions} == {
        "REDUCE_QUESTIONS_PER_ROUND": 5,
        "ADD_CATEGORIES": ["History"],
        "REDUCE_ROUNDS": 2,
    }

    async with session_factory() as session:
        counts = await RoundQuestionsRepo.count_by_round_number(session, game_id=game.game_id)
        stored = await session.get(Game, game.game_id)
        used = await ledger.used_question_ids(session, host_id=HOST_ID)
    assert counts == {}
    assert used == set()
    assert stored is not None
    assert stored.generation_in_progress is False


@pytest.mark.asyncio
async def test_generate_questions_rejects_concurrent_generation(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=10)
    game = await create_host_game(
        session_factory,
        total_rounds=1,
        questions_per_round=5,
        categories=["History"],
    )
    async with session_factory.begin() as session:
        stored = await session.get(Game, game.game_id)
        stored.generation_in_progress = True
        stored.generation_claimed_at = NOW

    with pytest.raises(GenerationInProgressError):
        await generate(session_factory, game_id=game.game_id)

    async with session_factory() as session:
        counts = await RoundQuestionsRepo.count_by_round_number(session, game_id=game.game_id)
    assert counts == {}


@pytest.mark.asyncio
async def test_generate_questions_reclaims_stale_generation_claim(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=10)
    game = await create_host_game(
        session_factory,
        total_rounds=1,
        questions_per_round=5,
        categories=["History"],
    )
    async with session_factory.begin() as session:
        stored = await session.get(Game, game.game_id)
        stored.generation_in_progress = True
        stored.generation_claimed_at = at(-600)

    result = await generate(session_factory, game_id=game.game_id)

    assert result.status == "generated"
    async with session_factory() as session:
        counts = await RoundQuestionsRepo.count_by_round_number(session, game_id=game.game_id)
        stored = await session.get(Game, game.game_id)
    assert counts == {1: 5}
    assert stored is not None
    assert stored.generation_in_progress is False
    assert stored.generation_claimed_at is None


@pytest.mark.asyncio
async def test_superseded_generation_claim_cannot_release_newer_claim(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=5)
    game = await create_host_game(
        session_factory,
        total_rounds=1,
        questions_per_round=5,
        categories=["History"],
    )
    async with session_factory.begin() as session:
        first = await GamesRepo.try_claim_generation(
            session, game_id=game.game_id, now_utc=at(-600), claim_ttl_seconds=300
        )
    async with session_factory.begin() as session:
        fresh_rejected = await GamesRepo.try_claim_generation(
            session, game_id=game.game_id, now_utc=at(-500), claim_ttl_seconds=300
        )
    async with session_factory.begin() as session:
        reclaimed = await GamesRepo.try_claim_generation(
            session, game_id=game.game_id, now_utc=NOW, claim_ttl_seconds=300
        )
    async with session_factory.begin() as session:
        stale_release = await GamesRepo.release_generation_claim(
            session, game_id=game.game_id, claimed_at=at(-600)
        )

    assert (first, fresh_rejected, reclaimed, stale_release) == (True, False, True, False)
    async with session_factory() as session:
        stored = await session.get(Game, game.game_id)
    assert stored is not None
    assert stored.generation_in_progress is True


@pytest.mark.asyncio
async def test_generate_questions_falls_back_to_used_questions_and_flags_rounds(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=8)
    first_game = await create_host_game(
        session_factory,
        total_rounds=1,
        questions_per_round=6,
        categories=["History"],
    )
    await generate(session_factory, game_id=first_game.game_id)
    second_game = await create_host_game(
        session_factory,
        total_rounds=1,
        questions_per_round=6,
        categories=["History"],
    )

    result = await generate(session_factory, game_id=second_game.game_id)

    assert result.status == "generated"
    assert result.duplicates_found == 4
    assert result.duplicate_rounds == [1]
    assert len(set(_question_ids(result))) == 6


@pytest.mark.asyncio
async def test_generate_questions_requires_game_host(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=10)
    game = await create_host_game(
        session_factory,
        total_rounds=1,
        questions_per_round=5,
        categories=["History"],
    )

    with pytest.raises(AuthorizationError):
        await generate(session_factory, game_id=game.game_id, host_id=OTHER_USER_ID)
    async with session_factory() as session:
        with pytest.raises(AuthorizationError):
            await list_game_rounds(session, game_id=game.game_id, host_id=OTHER_USER_ID)


@pytest.mark.asyncio
async def test_generate_questions_redistributes_deficit_across_categories(session_factory) -> None:
    await seed_questions(session_factory, category="History", count=2)
    await seed_questions(session_factory, category="Science", count=20)
    game = await create_host_game(
        session_factory,
        total_rounds=2,
        questions_per_round=5,
        categories=["History", "Science"],
    )

    result = await generate(session_factory, game_id=game.game_id)

    assert result.per_category_counts == {"History": 5, "Science": 5}
    assert result.drawn_by_category == {"History": 2, "Science": 8}
    assert len(_question_ids(result)) == 10
