from __future__ import annotations

import asyncio
import os
import re
from dataclasses import dataclass

import asyncpg
from sqlalchemy.engine import make_url

from trivia_engine.core.config import get_settings
from trivia_engine.core.integration_db_safety import assert_safe_integration_db

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
TEST_DATABASE_URL_ENV = "TEST_DATABASE_URL"


@dataclass(frozen=True, slots=True)
class DatabaseTarget:
    host: str
    port: int
    user: str
    password: str | None
    database: str


def resolve_target(database_url: str) -> DatabaseTarget:
    assert_safe_integration_db(database_url)
    parsed = make_url(database_url)
    db_name = (parsed.database or "").strip()
    if IDENTIFIER_RE.fullmatch(db_name) is None:
        raise RuntimeError(
            f"Unsupported database name '{db_name}'. "
            "Only [A-Za-z0-9_] identifiers are supported."
        )
    if parsed.username is None:
        raise RuntimeError("Database URL username is required.")
    return DatabaseTarget(
        host=parsed.host or "localhost",
        port=int(parsed.port or 5432),
        user=parsed.username,
        password=parsed.password,
        database=db_name,
    )


async def _ensure_database_exists(target: DatabaseTarget) -> bool:
    conn = await asyncpg.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database="postgres",
    )
    try:
        exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", target.database)
        if exists:
            return False
        await conn.execute(f'CREATE DATABASE "{target.database}"')
        return True
    finally:
        await conn.close()


def main() -> int:
    database_url = os.getenv(TEST_DATABASE_URL_ENV) or get_settings().database_url
    target = resolve_target(database_url)
    created = asyncio.run(_ensure_database_exists(target))
    action = "created" if created else "exists"
    print(f"ensure_test_db: {action} db={target.database} host={target.host}:{target.port}")  # noqa: T201
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
