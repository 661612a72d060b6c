from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import structlog
from fastapi import APIRouter, Query, Request

from trivia_engine.api.routes.games_models import (
    CreateGameRequest,
    GameResponse,
    GenerateQuestionsRequest,
    GenerationResponse,
    ReplaceQuestionRequest,
    ReplacementOptionResponse,
    ReplacementResponse,
    RoundResponse,
    game_response,
    generation_response,
    replacement_option_responses,
    replacement_response,
    round_responses,
)
from trivia_engine.api.routes.helpers import require_caller, to_http_exception
from trivia_engine.core.config import get_settings
from trivia_engine.db.session import SessionLocal
from trivia_engine.game.assignment.service import generate_questions, list_game_rounds
from trivia_engine.game.errors import TriviaEngineError
from trivia_engine.game.games.service import create_game, get_game, list_host_games
from trivia_engine.game.replacement.service import get_replacement_options, replace_question

router = APIRouter(tags=["games"])
logger = structlog.get_logger(__name__)


@router.post("/games", response_model=GameResponse, status_code=201)
async def post_game(request: Request, payload: CreateGameRequest) -> GameResponse:
    host_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await create_game(
                session,
                host_id=host_id,
                title=payload.title,
                total_rounds=payload.total_rounds,
                questions_per_round=payload.questions_per_round,
                categories=payload.categories,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return game_response(view)


@router.get("/games", response_model=list[GameResponse])
async def get_games(
    request: Request,
    status: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
) -> list[GameResponse]:
    host_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            views = await list_host_games(session, host_id=host_id, status=status, limit=limit)
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return [game_response(view) for view in views]


@router.get("/games/{game_id}", response_model=GameResponse)
async def get_game_by_id(request: Request, game_id: UUID) -> GameResponse:
    host_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await get_game(session, game_id=game_id, host_id=host_id)
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return game_response(view)


@router.post("/games/{game_id}/questions/generate", response_model=GenerationResponse)
async def post_generate_questions(
    request: Request,
    game_id: UUID,
    payload: GenerateQuestionsRequest | None = None,
) -> GenerationResponse:
    host_id = require_caller(request)
    force_regenerate = payload.force_regenerate if payload is not None else False
    try:
        result = await generate_questions(
            SessionLocal,
            game_id=game_id,
            host_id=host_id,
            force_regenerate=force_regenerate,
            now_utc=datetime.now(timezone.utc),
            claim_ttl_seconds=get_settings().generation_claim_ttl_seconds,
        )
    except TriviaEngineError as exc:
        logger.info(
            "question_generation_request_failed",
            game_id=str(game_id),
            host_id=host_id,
            error_code=exc.code,
        )
        raise to_http_exception(exc) from exc
    return generation_response(result)


@router.get("/games/{game_id}/rounds", response_model=list[RoundResponse])
async def get_game_rounds(request: Request, game_id: UUID) -> list[RoundResponse]:
    host_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            rounds = await list_game_rounds(session, game_id=game_id, host_id=host_id)
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return round_responses(rounds)


@router.get(
    "/games/{game_id}/replacement-options",
    response_model=list[ReplacementOptionResponse],
)
async def get_game_replacement_options(
    request: Request,
    game_id: UUID,
    question_id: str = Query(min_length=1, max_length=64),
    category: str = Query(min_length=1, max_length=64),
    limit: int | None = Query(default=None, ge=1, le=200),
) -> list[ReplacementOptionResponse]:
    host_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            options = await get_replacement_options(
                session,
                game_id=game_id,
                question_id=question_id,
                category=category,
                limit=limit if limit is not None else get_settings().replacement_options_limit,
                host_id=host_id,
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return replacement_option_responses(options)


@router.put("/assignments/{assignment_id}", response_model=ReplacementResponse)
async def put_assignment(
    request: Request,
    assignment_id: UUID,
    payload: ReplaceQuestionRequest,
) -> ReplacementResponse:
    host_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            result = await replace_question(
                session,
                assignment_id=assignment_id,
                new_question_id=payload.new_question_id,
                host_id=host_id,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return replacement_response(result)
