from __future__ import annotations

import pytest

from tests.api.api_fixtures import caller_headers
from tests.game.trivia_fixtures import HOST_ID, OTHER_USER_ID, seed_questions


async def _create_game(api_client, **overrides):  # noqa: ANN001, ANN202
    payload = {
        "title": "Pub Night",
        "total_rounds": 2,
        "questions_per_round": 3,
        "categories": ["History", "Science"],
    }
    payload.update(overrides)
    return await api_client.post("/games", json=payload, headers=caller_headers(HOST_ID))


@pytest.mark.asyncio
async def test_create_and_fetch_game(api_client, session_factory) -> None:
    await seed_questions(session_factory, category="History", count=10)
    await seed_questions(session_factory, category="Science", count=10)

    created = await _create_game(api_client)

    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "setup"
    assert body["categories"] == ["History", "Science"]
    assert body["total_questions"] == 6

    fetched = await api_client.get(f"/games/{body['game_id']}", headers=caller_headers(HOST_ID))
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Pub Night"

    forbidden = await api_client.get(f"/games/{body['game_id']}", headers=caller_headers(OTHER_USER_ID))
    assert forbidden.status_code == 403
    assert forbidden.json()["detail"]["code"] == "E_FORBIDDEN"

    listed = await api_client.get("/games?status=setup", headers=caller_headers(HOST_ID))
    assert [game["game_id"] for game in listed.json()] == [body["game_id"]]


@pytest.mark.asyncio
async def test_create_game_maps_validation_errors(api_client, session_factory) -> None:
    await seed_questions(session_factory, category="History", count=10)

    too_many_rounds = await _create_game(api_client, total_rounds=11, categories=["History"])
    unknown_category = await _create_game(api_client, categories=["History", "Astrology"])

    assert too_many_rounds.status_code == 422
    assert too_many_rounds.json()["detail"]["code"] == "E_VALIDATION"
    assert too_many_rounds.json()["detail"]["retryable_by_user"] is False
    assert unknown_category.status_code == 404
    assert unknown_category.json()["detail"]["code"] == "E_CATEGORY_NOT_FOUND"


@pytest.mark.asyncio
async def test_generate_questions_and_list_rounds(api_client, session_factory) -> None:
    await seed_questions(session_factory, category="History", count=10)
    await seed_questions(session_factory, category="Science", count=10)
    game_id = (await _create_game(api_client)).json()["game_id"]

    generated = await api_client.post(
        f"/games/{game_id}/questions/generate",
        headers=caller_headers(HOST_ID),
    )
    repeated = await api_client.post(
        f"/games/{game_id}/questions/generate",
        json={"force_regenerate": False},
        headers=caller_headers(HOST_ID),
    )
    rounds = await api_client.get(f"/games/{game_id}/rounds", headers=caller_headers(HOST_ID))

    assert generated.status_code == 200
    assert generated.json()["status"] == "generated"
    assert generated.json()["per_category_counts"] == {"History": 3, "Science": 3}
    assert repeated.json()["status"] == "existing"
    assert [len(item["questions"]) for item in rounds.json()] == [3, 3]


@pytest.mark.asyncio
async def test_generate_questions_reports_insufficient_pool(api_client, session_factory) -> None:
    await seed_questions(session_factory, category="History", count=4)
    game_id = (
        await _create_game(api_client, total_rounds=2, questions_per_round=5, categories=["History"])
    ).json()["game_id"]

    response = await api_client.post(
        f"/games/{game_id}/questions/generate",
        headers=caller_headers(HOST_ID),
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["code"] == "E_INSUFFICIENT_POOL"
    assert detail["retryable_by_user"] is True
    assert detail["shortfall"] == 6
    assert detail["needed"] == 10
    assert detail["available_by_category"] == {"History": 4}
    assert detail["suggestions"] == [{"code": "REDUCE_QUESTIONS_PER_ROUND", "value": 2}]


@pytest.mark.asyncio
async def test_replacement_options_and_replace(api_client, session_factory) -> None:
    await seed_questions(session_factory, category="History", count=8)
    game_id = (
        await _create_game(api_client, total_rounds=1, questions_per_round=3, categories=["History"])
    ).json()["game_id"]
    generated = await api_client.post(
        f"/games/{game_id}/questions/generate",
        headers=caller_headers(HOST_ID),
    )
    target = generated.json()["rounds"][0]["questions"][0]

    options = await api_client.get(
        f"/games/{game_id}/replacement-options",
        params={"question_id": target["question_id"], "category": "History"},
        headers=caller_headers(HOST_ID),
    )
    assert options.status_code == 200
    assert len(options.json()) == 2
    new_question_id = options.json()[0]["question_id"]

    replaced = await api_client.put(
        f"/assignments/{target['assignment_id']}",
        json={"new_question_id": new_question_id},
        headers=caller_headers(HOST_ID),
    )
    assert replaced.status_code == 200
    assert replaced.json()["previous_question_id"] == target["question_id"]
    assert replaced.json()["question_id"] == new_question_id

    duplicate = await api_client.put(
        f"/assignments/{target['assignment_id']}",
        json={"new_question_id": new_question_id},
        headers=caller_headers(HOST_ID),
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"]["code"] == "E_DUPLICATE_QUESTION"


@pytest.mark.asyncio
async def test_categories_endpoint_lists_active_counts(api_client, session_factory) -> None:
    await seed_questions(session_factory, category="History", count=3)

    response = await api_client.get("/categories", headers=caller_headers(HOST_ID))

    assert response.status_code == 200
    assert response.json() == [{"name": "History", "active_questions": 3}]
