from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field
from uuid import UUID

from trivia_engine.game.questions.seed import stable_shuffle


@dataclass(slots=True)
class CategoryPick:
    category: str
    question_ids: list[str]
    fallback_ids: set[str] = field(default_factory=set)


def order_candidates(
    pool_ids: Sequence[str],
    *,
    used_ids: Collection[str],
    seed: str,
) -> tuple[list[str], list[str]]:
    unused = [question_id for question_id in pool_ids if question_id not in used_ids]
    used = [question_id for question_id in pool_ids if question_id in used_ids]
    return (
        stable_shuffle(unused, seed=f"{seed}:unused"),
        stable_shuffle(used, seed=f"{seed}:used"),
    )


def pick_for_category(
    *,
    game_id: UUID,
    category: str,
    pool_ids: Sequence[str],
    used_ids: Collection[str],
    count: int,
) -> CategoryPick:
    unused, used = order_candidates(pool_ids, used_ids=used_ids, seed=f"{game_id}:{category}")
    chosen = unused[:count]
    fallback = used[: max(0, count - len(chosen))]
    return CategoryPick(
        category=category,
        question_ids=chosen + fallback,
        fallback_ids=set(fallback),
    )


def interleave(picks: Sequence[CategoryPick]) -> list[str]:
    """Round-robin over categories in selection order until every pick is placed."""
    stream: list[str] = []
    longest = max((len(pick.question_ids) for pick in picks), default=0)
    for position in range(longest):
        for pick in picks:
            if position < len(pick.question_ids):
                stream.append(pick.question_ids[position])
    return stream


def chunk_into_rounds(stream: Sequence[str], *, questions_per_round: int) -> list[list[str]]:
    return [
        list(stream[start : start + questions_per_round])
        for start in range(0, len(stream), questions_per_round)
    ]


def select_game_questions(
    *,
    game_id: UUID,
    drawn_by_category: Mapping[str, int],
    pools: Mapping[str, Sequence[str]],
    used_ids: Collection[str],
    questions_per_round: int,
) -> tuple[list[list[str]], set[str]]:
    """Returns the per-round question ids and the subset drawn from the host ledger."""
    picks = [
        pick_for_category(
            game_id=game_id,
            category=category,
            pool_ids=pools.get(category, ()),
            used_ids=used_ids,
            count=count,
        )
        for category, count in drawn_by_category.items()
    ]
    fallback_ids: set[str] = set()
    for pick in picks:
        fallback_ids.update(pick.fallback_ids)
    rounds = chunk_into_rounds(interleave(picks), questions_per_round=questions_per_round)
    return rounds, fallback_ids
