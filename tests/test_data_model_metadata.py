from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from trivia_engine.db.models import (  # noqa: F401
    AnswerRecord,
    Game,
    GameRound,
    GameSession,
    HostUsedQuestion,
    PlayerStats,
    Question,
    RoundQuestion,
)
from trivia_engine.db.models.base import Base


def _constraint_names(table_name: str, constraint_type: type) -> set[str]:
    table = Base.metadata.tables[table_name]
    return {
        constraint.name
        for constraint in table.constraints
        if isinstance(constraint, constraint_type)
    }


def test_all_trivia_tables_registered() -> None:
    expected_tables = {
        "questions",
        "games",
        "game_rounds",
        "round_questions",
        "host_used_questions",
        "game_sessions",
        "answer_records",
        "player_stats",
    }
    assert expected_tables == set(Base.metadata.tables)


def test_assignment_uniqueness_constraints_present() -> None:
    round_question_uniques = _constraint_names("round_questions", UniqueConstraint)
    assert "uq_round_questions_game_question" in round_question_uniques
    assert "uq_round_questions_round_order" in round_question_uniques
    assert "uq_round_questions_round_question" in round_question_uniques

    assert "uq_game_rounds_game_round_number" in _constraint_names("game_rounds", UniqueConstraint)
    assert "uq_answer_records_session_round_question" in _constraint_names(
        "answer_records",
        UniqueConstraint,
    )


def test_critical_check_constraints_present() -> None:
    assert {"ck_games_total_rounds_range", "ck_games_questions_per_round_range"} <= _constraint_names(
        "games",
        CheckConstraint,
    )
    assert "ck_game_sessions_question_index_range" in _constraint_names("game_sessions", CheckConstraint)
    assert "ck_answer_records_closed_consistency" in _constraint_names("answer_records", CheckConstraint)
    assert "ck_player_stats_correct_le_answered" in _constraint_names("player_stats", CheckConstraint)


def test_host_used_questions_keyed_by_host_and_question() -> None:
    primary_key = Base.metadata.tables["host_used_questions"].primary_key
    assert [column.name for column in primary_key.columns] == ["host_id", "question_id"]
