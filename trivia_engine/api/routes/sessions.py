from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Request

from trivia_engine.api.routes.helpers import require_caller, to_http_exception
from trivia_engine.api.routes.sessions_models import (
    AnswerResponse,
    GameSummaryResponse,
    QuestionResponse,
    SessionResponse,
    StartGameResponse,
    SubmitAnswerRequest,
    answer_response,
    question_response,
    session_response,
    summary_response,
)
from trivia_engine.db.session import SessionLocal
from trivia_engine.game.errors import TriviaEngineError
from trivia_engine.game.sessions.service import (
    cancel_game,
    complete_game,
    create_session,
    get_current_question,
    get_game_summary,
    get_session,
    pause_game,
    resume_game,
    start_game,
    submit_answer,
)

router = APIRouter(tags=["sessions"])


@router.post("/games/{game_id}/sessions", response_model=SessionResponse, status_code=201)
async def post_session(request: Request, game_id: UUID) -> SessionResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await create_session(
                session,
                game_id=game_id,
                user_id=user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return session_response(view)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session_by_id(request: Request, session_id: UUID) -> SessionResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await get_session(session, session_id=session_id, user_id=user_id)
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return session_response(view)


@router.post("/sessions/{session_id}/start", response_model=StartGameResponse)
async def post_start(request: Request, session_id: UUID) -> StartGameResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            result = await start_game(
                session,
                session_id=session_id,
                user_id=user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return StartGameResponse(
        session=session_response(result.session),
        first_question=question_response(result.first_question),
    )


@router.get("/sessions/{session_id}/question", response_model=QuestionResponse)
async def get_question(request: Request, session_id: UUID) -> QuestionResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await get_current_question(session, session_id=session_id, user_id=user_id)
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return question_response(view)


@router.post("/sessions/{session_id}/answers", response_model=AnswerResponse)
async def post_answer(
    request: Request,
    session_id: UUID,
    payload: SubmitAnswerRequest,
) -> AnswerResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            result = await submit_answer(
                session,
                session_id=session_id,
                user_id=user_id,
                assignment_id=payload.assignment_id,
                user_answer=payload.user_answer,
                time_to_answer_ms=payload.time_to_answer_ms,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return answer_response(result)


@router.post("/sessions/{session_id}/pause", response_model=SessionResponse)
async def post_pause(request: Request, session_id: UUID) -> SessionResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await pause_game(
                session,
                session_id=session_id,
                user_id=user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return session_response(view)


@router.post("/sessions/{session_id}/resume", response_model=QuestionResponse)
async def post_resume(request: Request, session_id: UUID) -> QuestionResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await resume_game(
                session,
                session_id=session_id,
                user_id=user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return question_response(view)


@router.post("/sessions/{session_id}/complete", response_model=GameSummaryResponse)
async def post_complete(request: Request, session_id: UUID) -> GameSummaryResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            summary = await complete_game(
                session,
                session_id=session_id,
                user_id=user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return summary_response(summary)


@router.post("/sessions/{session_id}/cancel", response_model=SessionResponse)
async def post_cancel(request: Request, session_id: UUID) -> SessionResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            view = await cancel_game(
                session,
                session_id=session_id,
                user_id=user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return session_response(view)


@router.get("/sessions/{session_id}/summary", response_model=GameSummaryResponse)
async def get_summary(request: Request, session_id: UUID) -> GameSummaryResponse:
    user_id = require_caller(request)
    try:
        async with SessionLocal.begin() as session:
            summary = await get_game_summary(session, session_id=session_id, user_id=user_id)
    except TriviaEngineError as exc:
        raise to_http_exception(exc) from exc
    return summary_response(summary)
