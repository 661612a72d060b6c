from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.games import Game
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.game.categories import CategorySelection
from trivia_engine.game.constants import (
    GAME_STATUS_SETUP,
    GAME_STATUSES,
    MAX_QUESTIONS_PER_ROUND,
    MAX_ROUNDS,
    MAX_TITLE_LENGTH,
    MIN_QUESTIONS_PER_ROUND,
    MIN_ROUNDS,
)
from trivia_engine.game.errors import AuthorizationError, GameNotFoundError, ValidationError
from trivia_engine.game.games.types import GameView
from trivia_engine.game.questions.bank import ensure_categories_exist
from trivia_engine.game.questions.bank import list_categories as list_bank_categories
from trivia_engine.game.questions.types import CategoryInfo

logger = structlog.get_logger(__name__)


def to_game_view(game: Game) -> GameView:
    return GameView(
        game_id=game.id,
        host_id=game.host_id,
        title=game.title,
        total_rounds=game.total_rounds,
        questions_per_round=game.questions_per_round,
        categories=tuple(game.categories),
        status=game.status,
        created_at=game.created_at,
    )


def _validate_shape(*, title: str, total_rounds: int, questions_per_round: int) -> str:
    normalized_title = title.strip()
    if not normalized_title:
        raise ValidationError("title must not be blank")
    if len(normalized_title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"title must be at most {MAX_TITLE_LENGTH} characters")
    if not MIN_ROUNDS <= total_rounds <= MAX_ROUNDS:
        raise ValidationError(f"total_rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}")
    if not MIN_QUESTIONS_PER_ROUND <= questions_per_round <= MAX_QUESTIONS_PER_ROUND:
        raise ValidationError(
            "questions_per_round must be between "
            f"{MIN_QUESTIONS_PER_ROUND} and {MAX_QUESTIONS_PER_ROUND}"
        )
    return normalized_title


async def load_host_game(
    session: AsyncSession,
    *,
    game_id: UUID,
    host_id: int,
    for_update: bool = False,
) -> Game:
    if for_update:
        game = await GamesRepo.get_by_id_for_update(session, game_id)
    else:
        game = await GamesRepo.get_by_id(session, game_id)
    if game is None:
        raise GameNotFoundError
    if game.host_id != host_id:
        raise AuthorizationError
    return game


async def create_game(
    session: AsyncSession,
    *,
    host_id: int,
    title: str,
    total_rounds: int,
    questions_per_round: int,
    categories: list[str],
    now_utc: datetime,
) -> GameView:
    normalized_title = _validate_shape(
        title=title,
        total_rounds=total_rounds,
        questions_per_round=questions_per_round,
    )
    selection = CategorySelection.parse(categories)
    await ensure_categories_exist(session, selection=selection)

    game = await GamesRepo.create(
        session,
        game=Game(
            id=uuid4(),
            host_id=host_id,
            title=normalized_title,
            total_rounds=total_rounds,
            questions_per_round=questions_per_round,
            categories=selection.as_list(),
            status=GAME_STATUS_SETUP,
            generation_in_progress=False,
            created_at=now_utc,
            updated_at=now_utc,
        ),
    )
    logger.info(
        "game_created",
        game_id=str(game.id),
        host_id=host_id,
        total_rounds=total_rounds,
        questions_per_round=questions_per_round,
        categories=selection.as_list(),
    )
    return to_game_view(game)


async def get_game(session: AsyncSession, *, game_id: UUID, host_id: int) -> GameView:
    game = await load_host_game(session, game_id=game_id, host_id=host_id)
    return to_game_view(game)


async def list_host_games(
    session: AsyncSession,
    *,
    host_id: int,
    status: str | None = None,
    limit: int = 50,
) -> list[GameView]:
    if status is not None and status not in GAME_STATUSES:
        raise ValidationError(f"unknown game status: {status}")
    games = await GamesRepo.list_for_host(session, host_id=host_id, status=status, limit=limit)
    return [to_game_view(game) for game in games]


async def list_categories(session: AsyncSession) -> list[CategoryInfo]:
    return await list_bank_categories(session)
