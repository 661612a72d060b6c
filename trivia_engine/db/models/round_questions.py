from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from trivia_engine.db.models.base import Base


class RoundQuestion(Base):
    __tablename__ = "round_questions"
    __table_args__ = (
        CheckConstraint("question_order >= 1", name="ck_round_questions_order_positive"),
        UniqueConstraint("round_id", "question_order", name="uq_round_questions_round_order"),
        UniqueConstraint("round_id", "question_id", name="uq_round_questions_round_question"),
        UniqueConstraint("game_id", "question_id", name="uq_round_questions_game_question"),
        Index("idx_round_questions_game", "game_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    game_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("games.id"), nullable=False)
    round_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("game_rounds.id"), nullable=False)
    question_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("questions.question_id"),
        nullable=False,
    )
    question_order: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
