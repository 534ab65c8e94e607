from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def rank_tuples(items: Iterable[tuple[T, int]]) -> list[tuple[T, int]]:
    """Sort ``(item, count)`` pairs by count, largest first; ties keep their input order."""
    return sorted(items, key=lambda item: item[1], reverse=True)
