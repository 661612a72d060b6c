from __future__ import annotations

from trivia_engine.game.assignment.distribution import (
    build_pool_suggestions,
    plan_distribution,
    redistribute_deficit,
)


def test_plan_distribution_splits_evenly_when_divisible() -> None:
    plan = plan_distribution(30, ["History", "Science", "Sports"])
    assert plan == {"History": 10, "Science": 10, "Sports": 10}


def test_plan_distribution_gives_remainder_to_first_categories_in_selection_order() -> None:
    plan = plan_distribution(10, ["a", "b", "c"])
    assert plan == {"a": 4, "b": 3, "c": 3}
    assert list(plan) == ["a", "b", "c"]


def test_plan_distribution_respects_selection_order_not_alphabetical() -> None:
    plan = plan_distribution(5, ["zoology", "art"])
    assert plan == {"zoology": 3, "art": 2}


def test_plan_distribution_always_sums_to_total() -> None:
    for total in range(1, 201, 7):
        for size in range(1, 7):
            categories = [f"c{index}" for index in range(size)]
            plan = plan_distribution(total, categories)
            assert sum(plan.values()) == total
            assert max(plan.values()) - min(plan.values()) <= 1


def test_redistribute_deficit_moves_shortfall_to_categories_with_spare() -> None:
    plan = {"a": 4, "b": 3, "c": 3}
    drawn = redistribute_deficit(plan, {"a": 1, "b": 10, "c": 10})
    assert drawn == {"a": 1, "b": 6, "c": 3}
    assert sum(drawn.values()) == 10


def test_redistribute_deficit_keeps_plan_when_pool_suffices() -> None:
    plan = {"a": 4, "b": 3, "c": 3}
    assert redistribute_deficit(plan, {"a": 50, "b": 50, "c": 50}) == plan


def test_build_pool_suggestions_reports_largest_fitting_values() -> None:
    suggestions = build_pool_suggestions(
        total_available=50,
        total_rounds=10,
        questions_per_round=20,
        unselected_categories=["Geography"],
    )
    by_code = {suggestion.code: suggestion.value for suggestion in suggestions}
    assert by_code == {
        "REDUCE_QUESTIONS_PER_ROUND": 5,
        "ADD_CATEGORIES": ["Geography"],
        "REDUCE_ROUNDS": 2,
    }


def test_build_pool_suggestions_skips_reductions_that_cannot_fit() -> None:
    suggestions = build_pool_suggestions(
        total_available=3,
        total_rounds=5,
        questions_per_round=4,
        unselected_categories=[],
    )
    assert suggestions == []
