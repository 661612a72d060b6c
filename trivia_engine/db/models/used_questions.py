from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from trivia_engine.db.models.base import Base


class HostUsedQuestion(Base):
    __tablename__ = "host_used_questions"

    host_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    question_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("questions.question_id"),
        primary_key=True,
    )
    first_used_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
