from __future__ import annotations

from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from trivia_engine.db.models.base import Base


class GameRound(Base):
    __tablename__ = "game_rounds"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending','in_progress','completed')",
            name="ck_game_rounds_status",
        ),
        CheckConstraint("round_number >= 1", name="ck_game_rounds_round_number_positive"),
        UniqueConstraint("game_id", "round_number", name="uq_game_rounds_game_round_number"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    game_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("games.id"), nullable=False)
    round_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
