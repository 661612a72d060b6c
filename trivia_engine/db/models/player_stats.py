from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from trivia_engine.db.models.base import Base


class PlayerStats(Base):
    __tablename__ = "player_stats"
    __table_args__ = (
        CheckConstraint(
            "games_completed >= 0 AND games_hosted >= 0",
            name="ck_player_stats_game_counters_non_negative",
        ),
        CheckConstraint(
            "correct_answers <= questions_answered",
            name="ck_player_stats_correct_le_answered",
        ),
    )

    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    games_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    games_hosted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_score: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    best_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct_answers: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    questions_answered: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    total_play_ms: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    last_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
