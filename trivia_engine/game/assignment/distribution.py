from __future__ import annotations

from collections.abc import Mapping, Sequence

from trivia_engine.game.constants import (
    SUGGESTION_ADD_CATEGORIES,
    SUGGESTION_REDUCE_QUESTIONS_PER_ROUND,
    SUGGESTION_REDUCE_ROUNDS,
)
from trivia_engine.game.errors import PoolSuggestion


def plan_distribution(total_questions: int, categories: Sequence[str]) -> dict[str, int]:
    """Splits the total evenly; the first `total mod k` categories get one extra."""
    if not categories:
        return {}
    base, remainder = divmod(total_questions, len(categories))
    return {
        category: base + (1 if index < remainder else 0)
        for index, category in enumerate(categories)
    }


def redistribute_deficit(
    plan: Mapping[str, int],
    available: Mapping[str, int],
) -> dict[str, int]:
    """Moves a category's shortfall onto categories with spare questions, in plan order.

    Callers must check that the summed availability covers the plan first.
    """
    drawn = {category: min(planned, available.get(category, 0)) for category, planned in plan.items()}
    deficit = sum(plan.values()) - sum(drawn.values())
    for category in plan:
        if deficit <= 0:
            break
        spare = available.get(category, 0) - drawn[category]
        if spare <= 0:
            continue
        extra = min(spare, deficit)
        drawn[category] += extra
        deficit -= extra
    return drawn


def build_pool_suggestions(
    *,
    total_available: int,
    total_rounds: int,
    questions_per_round: int,
    unselected_categories: Sequence[str],
) -> list[PoolSuggestion]:
    suggestions: list[PoolSuggestion] = []
    fitting_questions = total_available // total_rounds
    if 1 <= fitting_questions < questions_per_round:
        suggestions.append(
            PoolSuggestion(code=SUGGESTION_REDUCE_QUESTIONS_PER_ROUND, value=fitting_questions)
        )
    if unselected_categories:
        suggestions.append(
            PoolSuggestion(code=SUGGESTION_ADD_CATEGORIES, value=list(unselected_categories))
        )
    fitting_rounds = total_available // questions_per_round
    if 1 <= fitting_rounds < total_rounds:
        suggestions.append(PoolSuggestion(code=SUGGESTION_REDUCE_ROUNDS, value=fitting_rounds))
    return suggestions
