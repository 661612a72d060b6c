from __future__ import annotations

from typing import Any

import structlog
from fastapi import HTTPException, Request

from trivia_engine.core.config import get_settings
from trivia_engine.game.errors import (
    AuthorizationError,
    ConflictError,
    InsufficientPoolError,
    NotFoundError,
    StateError,
    TriviaEngineError,
    ValidationError,
)
from trivia_engine.services.request_auth import extract_caller_id

logger = structlog.get_logger(__name__)


def _status_code_for(exc: TriviaEngineError) -> int:
    if isinstance(exc, (ValidationError, InsufficientPoolError)):
        return 422
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (ConflictError, StateError)):
        return 409
    return 400


def to_http_exception(exc: TriviaEngineError) -> HTTPException:
    detail: dict[str, Any] = {
        "code": exc.code,
        "retryable_by_user": exc.retryable_by_user,
    }
    message = str(exc)
    if message:
        detail["message"] = message
    if isinstance(exc, InsufficientPoolError):
        detail.update(
            {
                "shortfall": exc.shortfall,
                "needed": exc.needed,
                "available_by_category": exc.available_by_category,
                "suggestions": [
                    {"code": suggestion.code, "value": suggestion.value}
                    for suggestion in exc.suggestions
                ],
            }
        )
    return HTTPException(status_code=_status_code_for(exc), detail=detail)


def require_caller(request: Request) -> int:
    caller_id = extract_caller_id(request, expected_token=get_settings().internal_api_token)
    if caller_id is None:
        logger.warning("request_auth_failed", path=request.url.path)
        raise HTTPException(status_code=401, detail={"code": "E_UNAUTHORIZED"})
    return caller_id
