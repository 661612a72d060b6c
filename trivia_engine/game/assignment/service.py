from __future__ import annotations

from collections import Counter
from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trivia_engine.db.models.games import Game
from trivia_engine.db.models.round_questions import RoundQuestion
from trivia_engine.db.models.rounds import GameRound
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.db.repo.questions_repo import QuestionsRepo
from trivia_engine.db.repo.round_questions_repo import RoundQuestionsRepo
from trivia_engine.db.repo.rounds_repo import GameRoundsRepo
from trivia_engine.game.assignment.distribution import (
    build_pool_suggestions,
    plan_distribution,
    redistribute_deficit,
)
from trivia_engine.game.assignment.selection import select_game_questions
from trivia_engine.game.assignment.types import AssignedQuestionView, GenerationResult, RoundPreview
from trivia_engine.game.categories import CategorySelection
from trivia_engine.game.constants import (
    GAME_STATUS_SETUP,
    GENERATION_CLAIM_TTL_SECONDS,
    GENERATION_STATUS_EXISTING,
    GENERATION_STATUS_GENERATED,
    GENERATION_STATUS_REGENERATED,
    ROUND_STATUS_PENDING,
)
from trivia_engine.game.errors import (
    GameNotEditableError,
    GenerationInProgressError,
    InsufficientPoolError,
)
from trivia_engine.game.games.service import load_host_game
from trivia_engine.game.questions import ledger
from trivia_engine.game.questions.bank import get_active_pools, get_questions_by_ids

logger = structlog.get_logger(__name__)


def is_assignment_set_complete(game: Game, counts_by_round: dict[int, int]) -> bool:
    if len(counts_by_round) != game.total_rounds:
        return False
    return all(
        counts_by_round.get(round_number) == game.questions_per_round
        for round_number in range(1, game.total_rounds + 1)
    )


async def build_round_previews(session: AsyncSession, *, game_id: UUID) -> list[RoundPreview]:
    rows = await RoundQuestionsRepo.list_for_game(session, game_id=game_id)
    questions = await get_questions_by_ids(
        session,
        question_ids={assignment.question_id for _, assignment in rows},
    )
    previews: dict[int, RoundPreview] = {}
    for round_number, assignment in rows:
        preview = previews.setdefault(round_number, RoundPreview(round_number=round_number))
        question = questions.get(assignment.question_id)
        preview.questions.append(
            AssignedQuestionView(
                assignment_id=assignment.id,
                question_id=assignment.question_id,
                question_order=assignment.question_order,
                category=question.category if question is not None else "",
                text=question.text if question is not None else "",
                correct_answer=question.correct_answer if question is not None else "",
            )
        )
    return [previews[round_number] for round_number in sorted(previews)]


def _drawn_from_previews(rounds: list[RoundPreview], categories: tuple[str, ...]) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for preview in rounds:
        for question in preview.questions:
            counts[question.category] += 1
    return {category: counts.get(category, 0) for category in categories}


async def _ensure_pool_covers(
    session: AsyncSession,
    *,
    game: Game,
    selection: CategorySelection,
    pools: dict[str, list[str]],
) -> None:
    needed = game.total_rounds * game.questions_per_round
    available_by_category = {category: len(pools.get(category, [])) for category in selection}
    total_available = sum(available_by_category.values())
    if total_available >= needed:
        return

    bank_counts = await QuestionsRepo.count_active_by_category(session)
    unselected = [
        category
        for category, total in bank_counts.items()
        if category not in selection.names and total > 0
    ]
    logger.info(
        "question_generation_pool_insufficient",
        game_id=str(game.id),
        needed=needed,
        available=total_available,
        available_by_category=available_by_category,
    )
    raise InsufficientPoolError(
        shortfall=needed - total_available,
        needed=needed,
        available_by_category=available_by_category,
        suggestions=build_pool_suggestions(
            total_available=total_available,
            total_rounds=game.total_rounds,
            questions_per_round=game.questions_per_round,
            unselected_categories=unselected,
        ),
    )


async def _generate_claimed(
    session: AsyncSession,
    *,
    game_id: UUID,
    host_id: int,
    force_regenerate: bool,
    now_utc: datetime,
) -> GenerationResult:
    game = await load_host_game(session, game_id=game_id, host_id=host_id, for_update=True)
    if game.status != GAME_STATUS_SETUP:
        raise GameNotEditableError

    selection = CategorySelection.parse(game.categories)
    total_questions = game.total_rounds * game.questions_per_round
    plan = plan_distribution(total_questions, selection.names)

    counts_by_round = await RoundQuestionsRepo.count_by_round_number(session, game_id=game.id)
    if counts_by_round and is_assignment_set_complete(game, counts_by_round) and not force_regenerate:
        rounds = await build_round_previews(session, game_id=game.id)
        return GenerationResult(
            success=True,
            status=GENERATION_STATUS_EXISTING,
            per_category_counts=plan,
            drawn_by_category=_drawn_from_previews(rounds, selection.names),
            duplicates_found=0,
            duplicate_rounds=[],
            rounds=rounds,
        )

    pools = await get_active_pools(session, selection=selection)
    await _ensure_pool_covers(session, game=game, selection=selection, pools=pools)

    all_pool_ids = {question_id for ids in pools.values() for question_id in ids}
    used_ids = await ledger.used_question_ids(session, host_id=game.host_id, question_ids=all_pool_ids)
    drawn = redistribute_deficit(
        plan,
        {category: len(pools.get(category, [])) for category in selection},
    )
    round_question_ids, fallback_ids = select_game_questions(
        game_id=game.id,
        drawn_by_category=drawn,
        pools=pools,
        used_ids=used_ids,
        questions_per_round=game.questions_per_round,
    )

    had_assignments = bool(counts_by_round)
    if had_assignments:
        await RoundQuestionsRepo.delete_for_game(session, game_id=game.id)
        await GameRoundsRepo.delete_for_game(session, game_id=game.id)

    rounds = await GameRoundsRepo.create_many(
        session,
        rounds=[
            GameRound(
                id=uuid4(),
                game_id=game.id,
                round_number=round_number,
                status=ROUND_STATUS_PENDING,
            )
            for round_number in range(1, game.total_rounds + 1)
        ],
    )
    assignments: list[RoundQuestion] = []
    duplicate_rounds: list[int] = []
    for game_round, question_ids in zip(rounds, round_question_ids, strict=True):
        if any(question_id in fallback_ids for question_id in question_ids):
            duplicate_rounds.append(game_round.round_number)
        for order, question_id in enumerate(question_ids, start=1):
            assignments.append(
                RoundQuestion(
                    id=uuid4(),
                    game_id=game.id,
                    round_id=game_round.id,
                    question_id=question_id,
                    question_order=order,
                    created_at=now_utc,
                )
            )
    await RoundQuestionsRepo.create_many(session, assignments=assignments)
    await ledger.mark_used(
        session,
        host_id=game.host_id,
        question_ids=[assignment.question_id for assignment in assignments],
        now_utc=now_utc,
    )
    game.updated_at = now_utc

    status = GENERATION_STATUS_REGENERATED if had_assignments else GENERATION_STATUS_GENERATED
    logger.info(
        "questions_generated",
        game_id=str(game.id),
        host_id=game.host_id,
        status=status,
        total_questions=len(assignments),
        duplicates_found=len(fallback_ids),
        duplicate_rounds=duplicate_rounds,
        drawn_by_category=drawn,
    )
    return GenerationResult(
        success=True,
        status=status,
        per_category_counts=plan,
        drawn_by_category=drawn,
        duplicates_found=len(fallback_ids),
        duplicate_rounds=duplicate_rounds,
        rounds=await build_round_previews(session, game_id=game.id),
    )


async def generate_questions(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    game_id: UUID,
    host_id: int,
    force_regenerate: bool,
    now_utc: datetime,
    claim_ttl_seconds: int = GENERATION_CLAIM_TTL_SECONDS,
) -> GenerationResult:
    async with session_factory.begin() as session:
        game = await load_host_game(session, game_id=game_id, host_id=host_id)
        if game.status != GAME_STATUS_SETUP:
            raise GameNotEditableError
        reclaiming = game.generation_in_progress
        claimed = await GamesRepo.try_claim_generation(
            session,
            game_id=game_id,
            now_utc=now_utc,
            claim_ttl_seconds=claim_ttl_seconds,
        )
    if not claimed:
        logger.info("question_generation_rejected_in_progress", game_id=str(game_id))
        raise GenerationInProgressError
    if reclaiming:
        logger.warning("question_generation_stale_claim_reclaimed", game_id=str(game_id))

    try:
        async with session_factory.begin() as session:
            return await _generate_claimed(
                session,
                game_id=game_id,
                host_id=host_id,
                force_regenerate=force_regenerate,
                now_utc=now_utc,
            )
    finally:
        async with session_factory.begin() as session:
            await GamesRepo.release_generation_claim(session, game_id=game_id, claimed_at=now_utc)


async def list_game_rounds(
    session: AsyncSession,
    *,
    game_id: UUID,
    host_id: int,
) -> list[RoundPreview]:
    game = await load_host_game(session, game_id=game_id, host_id=host_id)
    return await build_round_previews(session, game_id=game.id)
