"""Subset generation for many-to-one (split payment) matching."""
from typing import List, Sequence, TypeVar

from automatch.services.errors import InvalidInputError

T = TypeVar("T")


def generate_combinations(items: Sequence[T], size: int) -> List[List[T]]:
    """
    All ``size``-element subsets of ``items``, preserving input order.

    Subsets containing the first item are emitted before those without it.
    The count grows combinatorially; callers cap ``items`` first.
    """
    if size < 0:
        raise InvalidInputError("size", f"combination size must be non-negative, got {size}")
    return _combine(list(items), size)


def _combine(items: List[T], size: int) -> List[List[T]]:
    if size == 0:
        return [[]]
    if not items:
        return []

    first, rest = items[0], items[1:]
    with_first = [[first] + combo for combo in _combine(rest, size - 1)]
    without_first = _combine(rest, size)

    return with_first + without_first
