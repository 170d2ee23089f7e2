"""
Shared Northwind fixture.

Order totals: 10248 = 86.00, 10249 = 213.50, 10250 = 112.00, 10251 = 18.00,
10252 = 96.00 (grand total 525.50). Two orphan lines reference a missing order
and a missing product.
"""
from datetime import date
from decimal import Decimal
import pytest

from config import ReportSettings
from models import (
    Category, Supplier, Customer, Employee, Shipper, Product, Order, OrderLine
)
from snapshot import Snapshot


def build_snapshot() -> Snapshot:
    return Snapshot(
        categories=[
            Category(category_id=1, category_name="Beverages"),
            Category(category_id=2, category_name="Condiments"),
            Category(category_id=3, category_name="Seafood"),
        ],
        suppliers=[
            Supplier(supplier_id=1, supplier_name="Exotic Liquid"),
            Supplier(supplier_id=2, supplier_name="New Orleans Cajun Delights"),
            Supplier(supplier_id=3, supplier_name="Tokyo Traders"),
        ],
        customers=[
            Customer(customer_id=1, customer_name="Alfreds Futterkiste", country="Germany"),
            Customer(customer_id=2, customer_name="Ana Trujillo Emparedados y helados", country="Mexico"),
            Customer(customer_id=3, customer_name="Antonio Moreno Taqueria", country="Mexico"),
        ],
        employees=[
            Employee(employee_id=1, first_name="Nancy", last_name="Davolio"),
            Employee(employee_id=2, first_name="Andrew", last_name="Fuller"),
        ],
        shippers=[
            Shipper(shipper_id=1, shipper_name="Speedy Express"),
            Shipper(shipper_id=2, shipper_name="United Package"),
            Shipper(shipper_id=3, shipper_name="Federal Shipping"),
        ],
        products=[
            Product(product_id=1, product_name="Chais", supplier_id=1, category_id=1, price=Decimal("18.00")),
            Product(product_id=2, product_name="Chang", supplier_id=1, category_id=1, price=Decimal("19.00")),
            Product(product_id=3, product_name="Aniseed Syrup", supplier_id=1, category_id=2, price=Decimal("10.00")),
            Product(product_id=4, product_name="Chef Anton's Gumbo Mix", supplier_id=2, category_id=2, price=Decimal("21.35")),
            Product(product_id=5, product_name="Ikura", supplier_id=3, category_id=3, price=Decimal("31.00")),
        ],
        orders=[
            Order(order_id=10248, customer_id=1, employee_id=1, shipper_id=1, order_date=date(1996, 7, 4)),
            Order(order_id=10249, customer_id=2, employee_id=2, shipper_id=2, order_date=date(1996, 8, 10)),
            Order(order_id=10250, customer_id=3, employee_id=1, shipper_id=2, order_date=date(1997, 1, 15)),
            Order(order_id=10251, customer_id=1, employee_id=2, shipper_id=1, order_date=date(1997, 2, 20)),
            Order(order_id=10252, customer_id=2, employee_id=1, shipper_id=3, order_date=date(1997, 2, 25)),
        ],
        order_lines=[
            OrderLine(order_id=10248, product_id=1, quantity=2),
            OrderLine(order_id=10248, product_id=3, quantity=5),
            OrderLine(order_id=10249, product_id=4, quantity=10),
            OrderLine(order_id=10250, product_id=5, quantity=3),
            OrderLine(order_id=10250, product_id=2, quantity=1),
            OrderLine(order_id=10251, product_id=1, quantity=1),
            OrderLine(order_id=10252, product_id=3, quantity=2),
            OrderLine(order_id=10252, product_id=2, quantity=4),
            # Orphans
            OrderLine(order_id=99999, product_id=1, quantity=7),
            OrderLine(order_id=10251, product_id=99, quantity=1),
        ],
    )


@pytest.fixture
def snapshot():
    return build_snapshot()


@pytest.fixture
def settings(tmp_path):
    return ReportSettings(
        data_dir=str(tmp_path / "northwind"),
        output_dir=str(tmp_path / "output"),
        log_dir=str(tmp_path / "logs"),
    )
