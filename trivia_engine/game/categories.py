from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from trivia_engine.game.constants import MAX_CATEGORIES, MIN_CATEGORIES
from trivia_engine.game.errors import ValidationError


@dataclass(frozen=True, slots=True)
class CategorySelection:
    """Ordered, duplicate-free category names picked by a host."""

    names: tuple[str, ...]

    @classmethod
    def parse(cls, raw: Iterable[str]) -> CategorySelection:
        names: list[str] = []
        for value in raw:
            if not isinstance(value, str):
                raise ValidationError("category names must be strings")
            name = value.strip()
            if not name:
                raise ValidationError("category names must not be blank")
            if name in names:
                raise ValidationError(f"duplicate category: {name}")
            names.append(name)
        if len(names) < MIN_CATEGORIES:
            raise ValidationError("at least one category is required")
        if len(names) > MAX_CATEGORIES:
            raise ValidationError(f"at most {MAX_CATEGORIES} categories are allowed")
        return cls(names=tuple(names))

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def as_list(self) -> list[str]:
        return list(self.names)
