from __future__ import annotations

from types import SimpleNamespace

import pytest

from trivia_engine.services.request_auth import extract_caller_id, is_valid_internal_token, parse_user_id


def _request(headers: dict[str, str]) -> SimpleNamespace:
    return SimpleNamespace(headers=headers)


def test_is_valid_internal_token_requires_exact_match() -> None:
    assert is_valid_internal_token(expected_token="secret", received_token="secret") is True
    assert is_valid_internal_token(expected_token="secret", received_token="Secret") is False
    assert is_valid_internal_token(expected_token="secret", received_token=None) is False
    assert is_valid_internal_token(expected_token="", received_token="") is False


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("42", 42),
        (" 7 ", 7),
        ("0", None),
        ("-3", None),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_user_id(raw_value: str | None, expected: int | None) -> None:
    assert parse_user_id(raw_value) == expected


def test_extract_caller_id_needs_token_and_user() -> None:
    trusted = _request({"X-Internal-Token": "secret", "X-User-Id": "101"})
    untrusted = _request({"X-Internal-Token": "other", "X-User-Id": "101"})
    anonymous = _request({"X-Internal-Token": "secret"})

    assert extract_caller_id(trusted, expected_token="secret") == 101
    assert extract_caller_id(untrusted, expected_token="secret") is None
    assert extract_caller_id(anonymous, expected_token="secret") is None
