from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    Uuid,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column

from trivia_engine.db.models.base import Base


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        CheckConstraint(
            "status IN ('setup','in_progress','completed','cancelled')",
            name="ck_games_status",
        ),
        CheckConstraint(
            "total_rounds >= 1 AND total_rounds <= 10",
            name="ck_games_total_rounds_range",
        ),
        CheckConstraint(
            "questions_per_round >= 1 AND questions_per_round <= 20",
            name="ck_games_questions_per_round_range",
        ),
        Index("idx_games_host_created", "host_id", "created_at"),
        Index("idx_games_host_status", "host_id", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    host_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    total_rounds: Mapped[int] = mapped_column(Integer, nullable=False)
    questions_per_round: Mapped[int] = mapped_column(Integer, nullable=False)
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    generation_in_progress: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    generation_claimed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
