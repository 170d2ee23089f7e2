"""
Monthly revenue buckets and month-over-month growth.
"""
import calendar
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from aggregation import ZERO, percentage, round_money, top_n
from snapshot import LineFact


@dataclass(frozen=True)
class MonthlyBucket:
    year: int
    month: int
    revenue: Decimal

    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]


def monthly_buckets(
    facts: Iterable[LineFact],
    latest_year: Optional[int],
    years: int = 2,
) -> List[MonthlyBucket]:
    """Revenue per (year, month) for the trailing calendar years, oldest first"""
    if latest_year is None:
        return []
    first_year = latest_year - (years - 1)

    totals: Dict[Tuple[int, int], Decimal] = {}
    for fact in facts:
        order_date = fact.order.order_date
        if order_date.year < first_year:
            continue
        key = (order_date.year, order_date.month)
        totals[key] = totals.get(key, ZERO) + fact.revenue

    return [
        MonthlyBucket(year=year, month=month, revenue=revenue)
        for (year, month), revenue in sorted(totals.items())
    ]


def month_over_month_growth(buckets: Sequence[MonthlyBucket]) -> List[Optional[Decimal]]:
    """
    Percentage change against the previous bucket, rounded to 2 places.

    The first bucket has no prior period and a zero prior period has no defined
    ratio; both come back as None.
    """
    growth: List[Optional[Decimal]] = []
    previous: Optional[Decimal] = None
    for index, bucket in enumerate(buckets):
        if index == 0:
            growth.append(None)
        else:
            growth.append(round_money(percentage(bucket.revenue - previous, previous)))
        previous = bucket.revenue
    return growth


def peak_months(buckets: Sequence[MonthlyBucket], n: int = 3) -> List[MonthlyBucket]:
    return top_n(buckets, key=lambda bucket: bucket.revenue, n=n)
