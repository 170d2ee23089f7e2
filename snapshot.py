"""
In-memory snapshot of the Northwind tables.
Loads from pandas DataFrames (CSV directory or warehouse pull) and exposes the
inner-joined order lines every report is computed from.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Type
import pandas as pd

from models import (
    NorthwindRecord, Category, Supplier, Customer, Employee, Shipper,
    Product, Order, OrderLine
)

logger = logging.getLogger(__name__)

# Northwind table name -> row model, dimensions first
TABLES: Dict[str, Type[NorthwindRecord]] = {
    "Categories": Category,
    "Suppliers": Supplier,
    "Customers": Customer,
    "Employees": Employee,
    "Shippers": Shipper,
    "Products": Product,
    "Orders": Order,
    "OrderDetails": OrderLine,
}


class SnapshotLoadError(Exception):
    """Raised when a snapshot source cannot be read"""


@dataclass(frozen=True)
class LineFact:
    """An order line joined to its order and product"""
    line: OrderLine
    order: Order
    product: Product

    @property
    def revenue(self) -> Decimal:
        return self.product.price * self.line.quantity


def _records_from_dataframe(df: pd.DataFrame, model: Type[NorthwindRecord]) -> List[NorthwindRecord]:
    """Validate DataFrame rows into models, matching column names case-insensitively"""
    aliases = {
        field.alias.lower(): field.alias
        for field in model.model_fields.values()
        if field.alias
    }
    frame = df.rename(columns=lambda col: aliases.get(str(col).lower(), col))
    # object dtype first so NaN can be replaced by None in numeric columns
    frame = frame.astype(object).where(pd.notna(frame), None)
    return [model.model_validate(row) for row in frame.to_dict(orient="records")]


class Snapshot:
    """Immutable set of Northwind entities for one report run"""

    def __init__(
        self,
        categories: Iterable[Category] = (),
        suppliers: Iterable[Supplier] = (),
        customers: Iterable[Customer] = (),
        employees: Iterable[Employee] = (),
        shippers: Iterable[Shipper] = (),
        products: Iterable[Product] = (),
        orders: Iterable[Order] = (),
        order_lines: Iterable[OrderLine] = (),
    ):
        self.categories: Dict[int, Category] = {c.category_id: c for c in categories}
        self.suppliers: Dict[int, Supplier] = {s.supplier_id: s for s in suppliers}
        self.customers: Dict[int, Customer] = {c.customer_id: c for c in customers}
        self.employees: Dict[int, Employee] = {e.employee_id: e for e in employees}
        self.shippers: Dict[int, Shipper] = {s.shipper_id: s for s in shippers}
        self.products: Dict[int, Product] = {p.product_id: p for p in products}
        self.orders: Dict[int, Order] = {o.order_id: o for o in orders}
        self.order_lines: Tuple[OrderLine, ...] = tuple(order_lines)
        self.line_facts: Tuple[LineFact, ...] = self._join_lines()

    def _join_lines(self) -> Tuple[LineFact, ...]:
        """Inner-join order lines to orders and products, dropping orphans"""
        facts = []
        dropped = 0
        for line in self.order_lines:
            order = self.orders.get(line.order_id)
            product = self.products.get(line.product_id)
            if order is None or product is None:
                dropped += 1
                continue
            facts.append(LineFact(line=line, order=order, product=product))

        if dropped:
            logger.debug(f"Excluded {dropped} order lines with a missing order or product")
        return tuple(facts)

    def latest_order_year(self) -> Optional[int]:
        """Year of the most recent order, None for an empty snapshot"""
        if not self.orders:
            return None
        return max(order.order_date.year for order in self.orders.values())

    def row_counts(self) -> Dict[str, int]:
        return {table: len(rows) for table, rows in self._tables().items()}

    def _tables(self) -> Dict[str, Tuple[NorthwindRecord, ...]]:
        return {
            "Categories": tuple(self.categories.values()),
            "Suppliers": tuple(self.suppliers.values()),
            "Customers": tuple(self.customers.values()),
            "Employees": tuple(self.employees.values()),
            "Shippers": tuple(self.shippers.values()),
            "Products": tuple(self.products.values()),
            "Orders": tuple(self.orders.values()),
            "OrderDetails": self.order_lines,
        }

    @classmethod
    def from_dataframes(cls, dataframes: Dict[str, pd.DataFrame]) -> "Snapshot":
        """Build a snapshot from one DataFrame per Northwind table"""
        logger.info("Building snapshot from DataFrames")
        by_name = {name.lower(): df for name, df in dataframes.items()}

        records: Dict[str, List[NorthwindRecord]] = {}
        for table, model in TABLES.items():
            df = by_name.get(table.lower())
            if df is None:
                logger.warning(f"Table {table} missing from snapshot source, treating as empty")
                records[table] = []
                continue
            records[table] = _records_from_dataframe(df, model)
            logger.info(f"  {table}: {len(records[table])} rows")

        return cls(
            categories=records["Categories"],
            suppliers=records["Suppliers"],
            customers=records["Customers"],
            employees=records["Employees"],
            shippers=records["Shippers"],
            products=records["Products"],
            orders=records["Orders"],
            order_lines=records["OrderDetails"],
        )

    @classmethod
    def from_csv_dir(cls, data_dir: str) -> "Snapshot":
        """Load <Table>.csv (or <table>.csv) files from a directory"""
        path = Path(data_dir)
        if not path.is_dir():
            raise SnapshotLoadError(f"Snapshot directory not found: {path}")

        dataframes = {}
        for table in TABLES:
            for candidate in (path / f"{table}.csv", path / f"{table.lower()}.csv"):
                if not candidate.exists():
                    continue
                try:
                    dataframes[table] = pd.read_csv(candidate)
                except Exception as e:
                    logger.error(f"Error reading {candidate}: {str(e)}")
                    raise SnapshotLoadError(f"Could not read {candidate}") from e
                logger.info(f"Read {table} from {candidate}")
                break

        return cls.from_dataframes(dataframes)

    def to_dataframes(self) -> Dict[str, pd.DataFrame]:
        """Convert the snapshot back to DataFrames keyed by table name"""
        dataframes = {}
        for table, rows in self._tables().items():
            model = TABLES[table]
            columns = [field.alias for field in model.model_fields.values()]
            dataframes[table] = pd.DataFrame(
                [row.model_dump(by_alias=True) for row in rows],
                columns=columns,
            )
        return dataframes
