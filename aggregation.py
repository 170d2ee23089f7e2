"""
Revenue aggregation shared by the reports.
Sums are kept as exact Decimals; rounding happens once, when a report row is built.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from snapshot import LineFact

T = TypeVar("T")

ZERO = Decimal("0")
CENT = Decimal("0.01")


def round_money(value) -> Optional[Decimal]:
    """Round to 2 decimal places, half away from zero like SQL ROUND. None stays None."""
    if value is None:
        return None
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage(part, whole) -> Optional[Decimal]:
    """part / whole * 100, or None when whole is zero"""
    whole = Decimal(whole)
    if whole == 0:
        return None
    return Decimal(part) / whole * 100


def total_revenue(facts: Iterable[LineFact]) -> Decimal:
    return sum((fact.revenue for fact in facts), ZERO)


def revenue_by(
    facts: Iterable[LineFact],
    key: Callable[[LineFact], Optional[Hashable]],
) -> Dict[Hashable, Decimal]:
    """
    Sum line revenue per group.

    Groups come back in first-seen order. A key of None drops the line, which is
    how a report expresses an inner join against a missing dimension row.
    """
    totals: Dict[Hashable, Decimal] = {}
    for fact in facts:
        group = key(fact)
        if group is None:
            continue
        totals[group] = totals.get(group, ZERO) + fact.revenue
    return totals


def revenue_by_levels(
    facts: Iterable[LineFact],
    outer: Callable[[LineFact], Optional[Hashable]],
    inner: Callable[[LineFact], Optional[Hashable]],
) -> Dict[Hashable, Dict[Hashable, Decimal]]:
    """Two-level revenue_by: outer group -> inner group -> revenue"""
    nested: Dict[Hashable, Dict[Hashable, Decimal]] = {}
    for fact in facts:
        outer_group = outer(fact)
        inner_group = inner(fact)
        if outer_group is None or inner_group is None:
            continue
        groups = nested.setdefault(outer_group, {})
        groups[inner_group] = groups.get(inner_group, ZERO) + fact.revenue
    return nested


def top_n(items: Iterable[T], key: Callable[[T], object], n: int) -> List[T]:
    """Highest n items by key, equal keys keep their input order"""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    # sorted() stays stable with reverse=True
    return sorted(items, key=key, reverse=True)[:n]
