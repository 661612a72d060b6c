from __future__ import annotations

INTERNAL_TOKEN = "internal-secret"


def caller_headers(user_id: int) -> dict[str, str]:
    return {"X-Internal-Token": INTERNAL_TOKEN, "X-User-Id": str(user_id)}
