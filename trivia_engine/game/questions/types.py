from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class BankQuestion:
    question_id: str
    category: str
    text: str
    correct_answer: str
    distractors: tuple[str, ...]


@dataclass(slots=True)
class CategoryInfo:
    name: str
    active_questions: int
