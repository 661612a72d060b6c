"""m1_trivia_core_schema

Revision ID: c4d1e2f3a5b6
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "c4d1e2f3a5b6"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "questions",
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("distractor_1", sa.Text(), nullable=True),
        sa.Column("distractor_2", sa.Text(), nullable=True),
        sa.Column("distractor_3", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("status IN ('ACTIVE','DISABLED')", name="ck_questions_status"),
        sa.PrimaryKeyConstraint("question_id", name="pk_questions"),
    )
    op.create_index("idx_questions_category_status", "questions", ["category", "status"])

    op.create_table(
        "games",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("host_id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("total_rounds", sa.Integer(), nullable=False),
        sa.Column("questions_per_round", sa.Integer(), nullable=False),
        sa.Column("categories", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column(
            "generation_in_progress",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("generation_claimed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('setup','in_progress','completed','cancelled')",
            name="ck_games_status",
        ),
        sa.CheckConstraint(
            "total_rounds >= 1 AND total_rounds <= 10",
            name="ck_games_total_rounds_range",
        ),
        sa.CheckConstraint(
            "questions_per_round >= 1 AND questions_per_round <= 20",
            name="ck_games_questions_per_round_range",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_games"),
    )
    op.create_index("idx_games_host_created", "games", ["host_id", "created_at"])
    op.create_index("idx_games_host_status", "games", ["host_id", "status"])

    op.create_table(
        "game_rounds",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_id", sa.Uuid(), nullable=False),
        sa.Column("round_number", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending','in_progress','completed')",
            name="ck_game_rounds_status",
        ),
        sa.CheckConstraint("round_number >= 1", name="ck_game_rounds_round_number_positive"),
        sa.ForeignKeyConstraint(
            ["game_id"],
            ["games.id"],
            name="fk_game_rounds_game_id_games",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_game_rounds"),
        sa.UniqueConstraint("game_id", "round_number", name="uq_game_rounds_game_round_number"),
    )

    op.create_table(
        "round_questions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_id", sa.Uuid(), nullable=False),
        sa.Column("round_id", sa.Uuid(), nullable=False),
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("question_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("question_order >= 1", name="ck_round_questions_order_positive"),
        sa.ForeignKeyConstraint(
            ["game_id"],
            ["games.id"],
            name="fk_round_questions_game_id_games",
        ),
        sa.ForeignKeyConstraint(
            ["round_id"],
            ["game_rounds.id"],
            name="fk_round_questions_round_id_game_rounds",
        ),
        sa.ForeignKeyConstraint(
            ["question_id"],
            ["questions.question_id"],
            name="fk_round_questions_question_id_questions",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_round_questions"),
        sa.UniqueConstraint("round_id", "question_order", name="uq_round_questions_round_order"),
        sa.UniqueConstraint("round_id", "question_id", name="uq_round_questions_round_question"),
        sa.UniqueConstraint("game_id", "question_id", name="uq_round_questions_game_question"),
    )
    op.create_index("idx_round_questions_game", "round_questions", ["game_id"])

    op.create_table(
        "host_used_questions",
        sa.Column("host_id", sa.BigInteger(), nullable=False),
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("first_used_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["question_id"],
            ["questions.question_id"],
            name="fk_host_used_questions_question_id_questions",
        ),
        sa.PrimaryKeyConstraint("host_id", "question_id", name="pk_host_used_questions"),
    )

    op.create_table(
        "game_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("total_rounds", sa.Integer(), nullable=False),
        sa.Column("questions_per_round", sa.Integer(), nullable=False),
        sa.Column("current_round", sa.Integer(), nullable=False),
        sa.Column("current_question_index", sa.Integer(), nullable=False),
        sa.Column("total_score", sa.Integer(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paused_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paused_ms", sa.BigInteger(), nullable=False),
        sa.Column("total_duration_ms", sa.BigInteger(), nullable=True),
        sa.Column("stats_recorded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('setup','in_progress','paused','completed','cancelled')",
            name="ck_game_sessions_status",
        ),
        sa.CheckConstraint("total_score >= 0", name="ck_game_sessions_total_score_non_negative"),
        sa.CheckConstraint(
            "current_round >= 1 AND current_round <= total_rounds + 1",
            name="ck_game_sessions_current_round_range",
        ),
        sa.CheckConstraint(
            "current_question_index >= 0 AND current_question_index < questions_per_round",
            name="ck_game_sessions_question_index_range",
        ),
        sa.CheckConstraint("paused_ms >= 0", name="ck_game_sessions_paused_ms_non_negative"),
        sa.ForeignKeyConstraint(
            ["game_id"],
            ["games.id"],
            name="fk_game_sessions_game_id_games",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_game_sessions"),
    )
    op.create_index("idx_game_sessions_user_status", "game_sessions", ["user_id", "status"])
    op.create_index("idx_game_sessions_game", "game_sessions", ["game_id"])

    op.create_table(
        "answer_records",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("round_question_id", sa.Uuid(), nullable=False),
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("round_number", sa.Integer(), nullable=False),
        sa.Column("question_order", sa.Integer(), nullable=False),
        sa.Column("user_answer", sa.Text(), nullable=True),
        sa.Column("is_correct", sa.Boolean(), nullable=True),
        sa.Column("time_to_answer_ms", sa.Integer(), nullable=True),
        sa.Column("answered_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "time_to_answer_ms IS NULL OR time_to_answer_ms >= 0",
            name="ck_answer_records_time_non_negative",
        ),
        sa.CheckConstraint(
            "(answered_at IS NULL AND is_correct IS NULL) "
            "OR (answered_at IS NOT NULL AND is_correct IS NOT NULL)",
            name="ck_answer_records_closed_consistency",
        ),
        sa.ForeignKeyConstraint(
            ["session_id"],
            ["game_sessions.id"],
            name="fk_answer_records_session_id_game_sessions",
        ),
        sa.ForeignKeyConstraint(
            ["round_question_id"],
            ["round_questions.id"],
            name="fk_answer_records_round_question_id_round_questions",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_answer_records"),
        sa.UniqueConstraint(
            "session_id",
            "round_question_id",
            name="uq_answer_records_session_round_question",
        ),
    )
    op.create_index(
        "idx_answer_records_session_round",
        "answer_records",
        ["session_id", "round_number"],
    )

    op.create_table(
        "player_stats",
        sa.Column("user_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("games_completed", sa.Integer(), nullable=False),
        sa.Column("games_hosted", sa.Integer(), nullable=False),
        sa.Column("total_score", sa.BigInteger(), nullable=False),
        sa.Column("best_score", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.BigInteger(), nullable=False),
        sa.Column("questions_answered", sa.BigInteger(), nullable=False),
        sa.Column("total_play_ms", sa.BigInteger(), nullable=False),
        sa.Column("last_completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "games_completed >= 0 AND games_hosted >= 0",
            name="ck_player_stats_game_counters_non_negative",
        ),
        sa.CheckConstraint(
            "correct_answers <= questions_answered",
            name="ck_player_stats_correct_le_answered",
        ),
        sa.PrimaryKeyConstraint("user_id", name="pk_player_stats"),
    )


def downgrade() -> None:
    op.drop_table("player_stats")
    op.drop_index("idx_answer_records_session_round", table_name="answer_records")
    op.drop_table("answer_records")
    op.drop_index("idx_game_sessions_game", table_name="game_sessions")
    op.drop_index("idx_game_sessions_user_status", table_name="game_sessions")
    op.drop_table("game_sessions")
    op.drop_table("host_used_questions")
    op.drop_index("idx_round_questions_game", table_name="round_questions")
    op.drop_table("round_questions")
    op.drop_table("game_rounds")
    op.drop_index("idx_games_host_status", table_name="games")
    op.drop_index("idx_games_host_created", table_name="games")
    op.drop_table("games")
    op.drop_index("idx_questions_category_status", table_name="questions")
    op.drop_table("questions")
