from __future__ import annotations

from uuid import UUID

import pytest

from tests.game.trivia_fixtures import _fake_question
from trivia_engine.game.categories import CategorySelection
from trivia_engine.game.errors import ValidationError
from trivia_engine.game.questions.bank import to_bank_question
from trivia_engine.game.questions.presentation import is_correct_answer, shuffled_answers


def test_category_selection_keeps_order_and_trims_names() -> None:
    selection = CategorySelection.parse([" Science ", "History"])
    assert selection.names == ("Science", "History")
    assert len(selection) == 2


@pytest.mark.parametrize(
    "raw",
    [
        [],
        ["History", "History"],
        ["History", "  "],
        ["a", "b", "c", "d", "e", "f", "g"],
    ],
)
def test_category_selection_rejects_invalid_input(raw: list[str]) -> None:
    with pytest.raises(ValidationError):
        CategorySelection.parse(raw)


def test_to_bank_question_drops_empty_distractors() -> None:
    question = to_bank_question(_fake_question("q1", distractors=("One", None, " ")))
    assert question.distractors == ("One",)


def test_shuffled_answers_are_stable_per_assignment_and_contain_all_options() -> None:
    question = to_bank_question(_fake_question("q1"))
    assignment_id = UUID(int=7)
    first = shuffled_answers(question, assignment_id=assignment_id)
    second = shuffled_answers(question, assignment_id=assignment_id)
    assert first == second
    assert sorted(first) == sorted(["Right", "Wrong 1", "Wrong 2", "Wrong 3"])


def test_is_correct_answer_uses_exact_match() -> None:
    question = to_bank_question(_fake_question("q1", correct_answer="Paris"))
    assert is_correct_answer(question, "Paris") is True
    assert is_correct_answer(question, "paris") is False
    assert is_correct_answer(question, "Paris ") is False
