"""
The nine Northwind sales reports.

Every report is a pure function of a Snapshot and returns a list of row dicts
keyed by the column names in REPORT_COLUMNS. Money and percentages are rounded
to 2 places only when the row is built.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional
import pandas as pd

from aggregation import ZERO, percentage, revenue_by, revenue_by_levels, round_money, top_n
from config import ReportSettings
from order_stats import DEFAULT_LARGE_ORDER_THRESHOLD, order_item_counts, summarize_order_sizes
from ranking import competition_rank, row_number
from snapshot import Snapshot
from timeseries import month_over_month_growth, monthly_buckets

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

REPORT_COLUMNS: Dict[str, List[str]] = {
    "top_products": ["ProductName", "SupplierName", "TotalRevenue"],
    "top_customers": ["CustomerName", "OrderCount", "TotalRevenue"],
    "category_country_sales": ["CategoryName", "Country", "TotalRevenue"],
    "employee_leaderboard": ["EmployeeName", "TotalRevenue", "AvgOrderSize"],
    "supplier_contribution": ["SupplierName", "TotalRevenue", "DominantCategory", "DominantCategorySharePct"],
    "monthly_trend": ["OrderYear", "OrderMonth", "MonthName", "TotalRevenue", "MoM_Growth_Pct"],
    "order_size_stats": ["AvgOrderSize", "MinOrderSize", "MaxOrderSize", "LargeOrders", "LargeOrderPct"],
    "shipper_volume": ["ShipperName", "TotalOrders", "VolumeRank"],
    "high_value_orders": ["OrderID", "OrderTotal", "ProductName", "Quantity", "Price", "LineTotal"],
}


# ============ Revenue Reports ============

def top_products(snapshot: Snapshot, n: int = 10) -> List[Row]:
    """Best-selling products by revenue, with their supplier"""
    def product_supplier(fact):
        supplier = snapshot.suppliers.get(fact.product.supplier_id)
        if supplier is None:
            return None
        return (fact.product.product_name, supplier.supplier_name)

    totals = revenue_by(snapshot.line_facts, product_supplier)
    best = top_n(totals.items(), key=lambda item: item[1], n=n)
    return [
        {"ProductName": product_name, "SupplierName": supplier_name, "TotalRevenue": round_money(revenue)}
        for (product_name, supplier_name), revenue in best
    ]


def top_customers(snapshot: Snapshot, n: int = 10) -> List[Row]:
    """Customer lifetime value: total spend and distinct order count"""
    facts = [f for f in snapshot.line_facts if f.order.customer_id in snapshot.customers]
    totals = revenue_by(facts, lambda f: f.order.customer_id)

    order_ids: Dict[int, set] = {}
    for fact in facts:
        order_ids.setdefault(fact.order.customer_id, set()).add(fact.order.order_id)

    best = top_n(totals.items(), key=lambda item: item[1], n=n)
    return [
        {
            "CustomerName": snapshot.customers[customer_id].customer_name,
            "OrderCount": len(order_ids[customer_id]),
            "TotalRevenue": round_money(revenue),
        }
        for customer_id, revenue in best
    ]


def category_country_sales(snapshot: Snapshot) -> List[Row]:
    """Revenue per product category and customer country"""
    def category_country(fact):
        category = snapshot.categories.get(fact.product.category_id)
        customer = snapshot.customers.get(fact.order.customer_id)
        if category is None or customer is None:
            return None
        return (category.category_name, customer.country)

    totals = revenue_by(snapshot.line_facts, category_country)
    # Country ascending, then revenue descending within a country
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ordered = sorted(ordered, key=lambda item: item[0][1])
    return [
        {"CategoryName": category_name, "Country": country, "TotalRevenue": round_money(revenue)}
        for (category_name, country), revenue in ordered
    ]


def employee_leaderboard(snapshot: Snapshot) -> List[Row]:
    """Revenue and average order value per employee for the latest order year"""
    latest_year = snapshot.latest_order_year()
    if latest_year is None:
        return []

    def employee_name(fact):
        employee = snapshot.employees.get(fact.order.employee_id)
        return employee.full_name if employee else None

    facts = [f for f in snapshot.line_facts if f.order.order_date.year == latest_year]
    per_order = revenue_by_levels(facts, outer=employee_name, inner=lambda f: f.order.order_id)

    rows = []
    for name, order_totals in per_order.items():
        revenue = sum(order_totals.values(), ZERO)
        rows.append({
            "EmployeeName": name,
            "TotalRevenue": revenue,
            "AvgOrderSize": revenue / len(order_totals),
        })

    rows.sort(key=lambda row: row["TotalRevenue"], reverse=True)
    return [
        {**row, "TotalRevenue": round_money(row["TotalRevenue"]), "AvgOrderSize": round_money(row["AvgOrderSize"])}
        for row in rows
    ]


# ============ Supplier Dominance ============

def supplier_category_breakdown(snapshot: Snapshot) -> List[Row]:
    """
    Every (supplier, category) pair with its share of the supplier's revenue.

    CategoryRank is a row number inside each supplier, highest revenue first, so
    exactly one category per supplier has rank 1 even when revenues tie.
    Values are left unrounded.
    """
    def supplier_id(fact):
        return fact.product.supplier_id if fact.product.supplier_id in snapshot.suppliers else None

    def category_name(fact):
        category = snapshot.categories.get(fact.product.category_id)
        return category.category_name if category else None

    nested = revenue_by_levels(snapshot.line_facts, outer=supplier_id, inner=category_name)

    entries = []
    for sid, categories in nested.items():
        supplier_total = sum(categories.values(), ZERO)
        for name, revenue in categories.items():
            entries.append({
                "SupplierID": sid,
                "SupplierName": snapshot.suppliers[sid].supplier_name,
                "CategoryName": name,
                "CategoryRevenue": revenue,
                "TotalRevenue": supplier_total,
                "CategorySharePct": percentage(revenue, supplier_total),
            })

    ranks = row_number(
        entries,
        score=lambda entry: entry["CategoryRevenue"],
        partition=lambda entry: entry["SupplierID"],
    )
    for entry, rank in zip(entries, ranks):
        entry["CategoryRank"] = rank
    return entries


def supplier_contribution(snapshot: Snapshot) -> List[Row]:
    """Suppliers by total revenue with their single dominant category"""
    dominant = [row for row in supplier_category_breakdown(snapshot) if row["CategoryRank"] == 1]
    dominant.sort(key=lambda row: row["TotalRevenue"], reverse=True)
    return [
        {
            "SupplierName": row["SupplierName"],
            "TotalRevenue": round_money(row["TotalRevenue"]),
            "DominantCategory": row["CategoryName"],
            "DominantCategorySharePct": round_money(row["CategorySharePct"]),
        }
        for row in dominant
    ]


# ============ Trend & Order Shape ============

def monthly_trend(snapshot: Snapshot) -> List[Row]:
    """Monthly revenue over the last two calendar years with month-over-month growth"""
    buckets = monthly_buckets(snapshot.line_facts, snapshot.latest_order_year())
    growth = month_over_month_growth(buckets)
    return [
        {
            "OrderYear": bucket.year,
            "OrderMonth": bucket.month,
            "MonthName": bucket.month_name,
            "TotalRevenue": round_money(bucket.revenue),
            "MoM_Growth_Pct": pct,
        }
        for bucket, pct in zip(buckets, growth)
    ]


def order_size_stats(snapshot: Snapshot, threshold: int = DEFAULT_LARGE_ORDER_THRESHOLD) -> List[Row]:
    counts = order_item_counts(snapshot.line_facts)
    summary = summarize_order_sizes(list(counts.values()), threshold=threshold)
    return [summary] if summary is not None else []


def shipper_volume(snapshot: Snapshot) -> List[Row]:
    """Orders handled per shipper, ties share a rank"""
    counts: Dict[int, int] = {}
    for order in snapshot.orders.values():
        if order.shipper_id not in snapshot.shippers:
            continue
        counts[order.shipper_id] = counts.get(order.shipper_id, 0) + 1

    entries = list(counts.items())
    ranks = competition_rank(entries, score=lambda entry: entry[1])
    ranked = sorted(zip(entries, ranks), key=lambda pair: pair[1])
    return [
        {"ShipperName": snapshot.shippers[sid].shipper_name, "TotalOrders": total, "VolumeRank": rank}
        for (sid, total), rank in ranked
    ]


def high_value_orders(snapshot: Snapshot, cutoff: int = 10) -> List[Row]:
    """
    Line items of the highest-value orders.

    Orders are ranked with competition rank, so every order tied at the cutoff
    rank is included and the result can hold more than `cutoff` orders.
    """
    order_totals = revenue_by(snapshot.line_facts, lambda f: f.order.order_id)
    entries = list(order_totals.items())
    ranks = competition_rank(entries, score=lambda entry: entry[1])
    selected = {order_id: total for (order_id, total), rank in zip(entries, ranks) if rank <= cutoff}

    rows = [
        {
            "OrderID": fact.order.order_id,
            "OrderTotal": selected[fact.order.order_id],
            "ProductName": fact.product.product_name,
            "Quantity": fact.line.quantity,
            "Price": fact.product.price,
            "LineTotal": fact.revenue,
        }
        for fact in snapshot.line_facts
        if fact.order.order_id in selected
    ]
    rows.sort(key=lambda row: (-row["OrderTotal"], row["OrderID"], -row["LineTotal"]))
    for row in rows:
        for column in ("OrderTotal", "Price", "LineTotal"):
            row[column] = round_money(row[column])
    return rows


# ============ Runner ============

REPORTS: Dict[str, Callable[[Snapshot, ReportSettings], List[Row]]] = {
    "top_products": lambda snapshot, settings: top_products(snapshot, n=settings.top_n),
    "top_customers": lambda snapshot, settings: top_customers(snapshot, n=settings.top_n),
    "category_country_sales": lambda snapshot, settings: category_country_sales(snapshot),
    "employee_leaderboard": lambda snapshot, settings: employee_leaderboard(snapshot),
    "supplier_contribution": lambda snapshot, settings: supplier_contribution(snapshot),
    "monthly_trend": lambda snapshot, settings: monthly_trend(snapshot),
    "order_size_stats": lambda snapshot, settings: order_size_stats(
        snapshot, threshold=settings.large_order_threshold
    ),
    "shipper_volume": lambda snapshot, settings: shipper_volume(snapshot),
    "high_value_orders": lambda snapshot, settings: high_value_orders(
        snapshot, cutoff=settings.high_value_rank_cutoff
    ),
}


def run_report(name: str, snapshot: Snapshot, settings: Optional[ReportSettings] = None) -> List[Row]:
    if name not in REPORTS:
        raise KeyError(f"Unknown report: {name}")
    settings = settings or ReportSettings()
    rows = REPORTS[name](snapshot, settings)
    logger.info(f"Report {name}: {len(rows)} rows")
    return rows


def run_all_reports(snapshot: Snapshot, settings: Optional[ReportSettings] = None) -> Dict[str, List[Row]]:
    """Run every report one after another"""
    settings = settings or ReportSettings()
    return {name: run_report(name, snapshot, settings) for name in REPORTS}


async def run_all_reports_async(
    snapshot: Snapshot,
    settings: Optional[ReportSettings] = None,
) -> Dict[str, List[Row]]:
    """Run every report concurrently, each on a worker thread"""
    settings = settings or ReportSettings()
    names = list(REPORTS)
    logger.info(f"Starting {len(names)} reports concurrently")
    results = await asyncio.gather(
        *(asyncio.to_thread(run_report, name, snapshot, settings) for name in names)
    )
    return dict(zip(names, results))


def report_to_dataframe(name: str, rows: List[Row]) -> pd.DataFrame:
    """Report rows as a DataFrame with the report's columns, even when empty"""
    return pd.DataFrame(rows, columns=REPORT_COLUMNS[name])
