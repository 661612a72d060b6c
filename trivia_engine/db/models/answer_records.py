from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from trivia_engine.db.models.base import Base


class AnswerRecord(Base):
    __tablename__ = "answer_records"
    __table_args__ = (
        CheckConstraint(
            "time_to_answer_ms IS NULL OR time_to_answer_ms >= 0",
            name="ck_answer_records_time_non_negative",
        ),
        CheckConstraint(
            "(answered_at IS NULL AND is_correct IS NULL) "
            "OR (answered_at IS NOT NULL AND is_correct IS NOT NULL)",
            name="ck_answer_records_closed_consistency",
        ),
        UniqueConstraint(
            "session_id",
            "round_question_id",
            name="uq_answer_records_session_round_question",
        ),
        Index("idx_answer_records_session_round", "session_id", "round_number"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    session_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("game_sessions.id"), nullable=False)
    round_question_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("round_questions.id"),
        nullable=False,
    )
    question_id: Mapped[str] = mapped_column(String(64), nullable=False)
    round_number: Mapped[int] = mapped_column(Integer, nullable=False)
    question_order: Mapped[int] = mapped_column(Integer, nullable=False)
    user_answer: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_correct: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    time_to_answer_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    answered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
