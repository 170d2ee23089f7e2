"""
Window-function style ranking.

Two strategies with different tie handling:

- row_number: every entry gets a unique position 1..n inside its partition,
  equal scores are ordered by input position.
- competition_rank: equal scores share a rank and the following rank skips
  ahead by the size of the tie (1, 1, 3, ...).

Both rank by descending score and return ranks aligned with the input.
"""
from typing import Callable, Dict, Hashable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def _partitions(
    items: Sequence[T],
    partition: Optional[Callable[[T], Hashable]],
) -> List[List[int]]:
    groups: Dict[Hashable, List[int]] = {}
    for index, item in enumerate(items):
        part = partition(item) if partition else None
        groups.setdefault(part, []).append(index)
    return list(groups.values())


def _ordered(items: Sequence[T], indexes: List[int], score: Callable[[T], object]) -> List[int]:
    return sorted(indexes, key=lambda i: score(items[i]), reverse=True)


def row_number(
    items: Sequence[T],
    score: Callable[[T], object],
    partition: Optional[Callable[[T], Hashable]] = None,
) -> List[int]:
    """ROW_NUMBER() OVER (PARTITION BY partition ORDER BY score DESC)"""
    items = list(items)
    ranks = [0] * len(items)
    for indexes in _partitions(items, partition):
        for position, index in enumerate(_ordered(items, indexes, score), start=1):
            ranks[index] = position
    return ranks


def competition_rank(
    items: Sequence[T],
    score: Callable[[T], object],
    partition: Optional[Callable[[T], Hashable]] = None,
) -> List[int]:
    """RANK() OVER (PARTITION BY partition ORDER BY score DESC)"""
    items = list(items)
    ranks = [0] * len(items)
    for indexes in _partitions(items, partition):
        rank = 0
        previous = None
        for position, index in enumerate(_ordered(items, indexes, score), start=1):
            value = score(items[index])
            if position == 1 or value != previous:
                rank = position
                previous = value
            ranks[index] = rank
    return ranks
