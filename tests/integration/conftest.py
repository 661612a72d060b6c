from __future__ import annotations

import pytest
from sqlalchemy import text

from trivia_engine.core.integration_db_safety import assert_safe_integration_db
from trivia_engine.db import models  # noqa: F401
from trivia_engine.db.models.base import Base
from trivia_engine.db.session import SessionLocal, engine


@pytest.fixture(scope="session", autouse=True)
def guard_integration_db_target() -> None:
    assert_safe_integration_db(str(engine.url))


@pytest.fixture(autouse=True)
async def reset_schema() -> None:
    # Dispose pooled connections between tests to avoid cross-event-loop asyncpg reuse.
    await engine.dispose()

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:  # pragma: no cover - environment-dependent
        pytest.skip(f"Postgres is required for integration tests: {exc}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()


@pytest.fixture
def session_factory():  # noqa: ANN201
    return SessionLocal
