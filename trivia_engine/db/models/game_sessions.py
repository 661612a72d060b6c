from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from trivia_engine.db.models.base import Base


class GameSession(Base):
    __tablename__ = "game_sessions"
    __table_args__ = (
        CheckConstraint(
            "status IN ('setup','in_progress','paused','completed','cancelled')",
            name="ck_game_sessions_status",
        ),
        CheckConstraint("total_score >= 0", name="ck_game_sessions_total_score_non_negative"),
        CheckConstraint(
            "current_round >= 1 AND current_round <= total_rounds + 1",
            name="ck_game_sessions_current_round_range",
        ),
        CheckConstraint(
            "current_question_index >= 0 AND current_question_index < questions_per_round",
            name="ck_game_sessions_question_index_range",
        ),
        CheckConstraint("paused_ms >= 0", name="ck_game_sessions_paused_ms_non_negative"),
        Index("idx_game_sessions_user_status", "user_id", "status"),
        Index("idx_game_sessions_game", "game_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    game_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("games.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    total_rounds: Mapped[int] = mapped_column(Integer, nullable=False)
    questions_per_round: Mapped[int] = mapped_column(Integer, nullable=False)
    current_round: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    current_question_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    paused_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    paused_ms: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    total_duration_ms: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    stats_recorded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
