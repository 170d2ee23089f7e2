"""
Order size statistics: how many line items an order carries.
"""
from collections import Counter
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Sequence

from aggregation import percentage, round_money
from snapshot import LineFact

DEFAULT_LARGE_ORDER_THRESHOLD = 10


def order_item_counts(facts: Iterable[LineFact]) -> Dict[int, int]:
    """Number of line items per order id"""
    return dict(Counter(fact.order.order_id for fact in facts))


def summarize_order_sizes(
    item_counts: Sequence[int],
    threshold: int = DEFAULT_LARGE_ORDER_THRESHOLD,
) -> Optional[Dict[str, Any]]:
    """Average/min/max order size plus the share of orders above threshold. None when there are no orders."""
    if not item_counts:
        return None

    total_orders = len(item_counts)
    large_orders = sum(1 for count in item_counts if count > threshold)
    return {
        "AvgOrderSize": round_money(Decimal(sum(item_counts)) / total_orders),
        "MinOrderSize": min(item_counts),
        "MaxOrderSize": max(item_counts),
        "LargeOrders": large_orders,
        "LargeOrderPct": round_money(percentage(large_orders, total_orders)),
    }
