from __future__ import annotations

import hashlib
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def stable_key(seed: str) -> int:
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def stable_shuffle(items: Sequence[T], *, seed: str, key=str) -> list[T]:
    """Orders items by a sha256 of (seed, item) so the result is reproducible."""
    return sorted(items, key=lambda item: (stable_key(f"{seed}:{key(item)}"), key(item)))
