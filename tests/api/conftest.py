from __future__ import annotations

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from tests.api.api_fixtures import INTERNAL_TOKEN
from trivia_engine.api.routes import categories, games, helpers, players, sessions
from trivia_engine.main import app


@pytest.fixture
def internal_settings(monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
    settings = SimpleNamespace(
        internal_api_token=INTERNAL_TOKEN,
        replacement_options_limit=2,
        generation_claim_ttl_seconds=300,
    )
    monkeypatch.setattr(helpers, "get_settings", lambda: settings)
    monkeypatch.setattr(games, "get_settings", lambda: settings)
    return settings


@pytest.fixture
async def api_client(monkeypatch: pytest.MonkeyPatch, session_factory, internal_settings):  # noqa: ANN001, ANN201
    for module in (categories, games, players, sessions):
        monkeypatch.setattr(module, "SessionLocal", session_factory)
    async with AsyncClient(
        transport=ASGITransport(app=app, client=("127.0.0.1", 8080)),
        base_url="http://testserver",
    ) as client:
        yield client
