from __future__ import annotations

import secrets

from fastapi import Request

INTERNAL_TOKEN_HEADER = "X-Internal-Token"
USER_ID_HEADER = "X-User-Id"


def is_valid_internal_token(*, expected_token: str, received_token: str | None) -> bool:
    if not expected_token or not received_token:
        return False
    return secrets.compare_digest(expected_token, received_token)


def parse_user_id(raw_value: str | None) -> int | None:
    if raw_value is None:
        return None
    candidate = raw_value.strip()
    if not candidate or not candidate.isdigit():
        return None
    user_id = int(candidate)
    return user_id if user_id > 0 else None


def extract_caller_id(request: Request, *, expected_token: str) -> int | None:
    """Returns the gateway-authenticated user id, or None when the request is not trusted."""
    if not is_valid_internal_token(
        expected_token=expected_token,
        received_token=request.headers.get(INTERNAL_TOKEN_HEADER),
    ):
        return None
    return parse_user_id(request.headers.get(USER_ID_HEADER))
