from __future__ import annotations

from uuid import UUID

from trivia_engine.game.questions.seed import stable_shuffle
from trivia_engine.game.questions.types import BankQuestion


def shuffled_answers(question: BankQuestion, *, assignment_id: UUID) -> tuple[str, ...]:
    """Answers in a fixed per-assignment order; the correct one is not always first."""
    unique: list[str] = []
    for answer in (question.correct_answer, *question.distractors):
        if answer not in unique:
            unique.append(answer)
    return tuple(stable_shuffle(unique, seed=f"answers:{assignment_id}"))


def is_correct_answer(question: BankQuestion, user_answer: str) -> bool:
    return user_answer == question.correct_answer
