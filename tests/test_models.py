"""
Tests for Pydantic models
"""
import pytest
from datetime import date, datetime
from decimal import Decimal
from models import Category, Customer, Employee, Product, Order, OrderLine


class TestCategory:
    def test_valid_category(self):
        cat = Category(category_id=1, category_name="Beverages")
        assert cat.category_id == 1
        assert cat.category_name == "Beverages"

    def test_populate_by_northwind_column_names(self):
        cat = Category.model_validate({"CategoryID": 2, "CategoryName": "Condiments", "Description": "Sauces"})
        assert cat.category_id == 2
        assert cat.category_name == "Condiments"

    def test_category_required_fields(self):
        with pytest.raises(Exception):
            Category(category_id=1)  # Missing category_name


class TestProduct:
    def test_valid_product(self):
        product = Product(
            product_id=1,
            product_name="Chais",
            supplier_id=1,
            category_id=1,
            unit="10 boxes x 20 bags",
            price=Decimal("18.00")
        )
        assert product.product_name == "Chais"
        assert product.price == Decimal("18.00")
        assert product.unit == "10 boxes x 20 bags"

    def test_float_price_keeps_decimal_digits(self):
        product = Product(product_id=1, product_name="Chang", supplier_id=1, category_id=1, price=19.45)
        assert product.price == Decimal("19.45")

    def test_negative_price_rejected(self):
        with pytest.raises(Exception):
            Product(product_id=1, product_name="Chang", supplier_id=1, category_id=1, price=-1)

    def test_product_is_frozen(self):
        product = Product(product_id=1, product_name="Chang", supplier_id=1, category_id=1, price=19)
        with pytest.raises(Exception):
            product.price = Decimal("1")


class TestOrder:
    def test_order_date_from_string(self):
        order = Order.model_validate({
            "OrderID": 10248, "CustomerID": 90, "EmployeeID": 5, "ShipperID": 3, "OrderDate": "1996-07-04"
        })
        assert order.order_date == date(1996, 7, 4)

    def test_order_date_from_timestamp_string(self):
        order = Order(order_id=1, customer_id=1, employee_id=1, shipper_id=1, order_date="1996-07-04 00:00:00")
        assert order.order_date == date(1996, 7, 4)

    def test_order_date_from_datetime(self):
        order = Order(order_id=1, customer_id=1, employee_id=1, shipper_id=1, order_date=datetime(1997, 2, 1, 0, 0))
        assert order.order_date == date(1997, 2, 1)


class TestOrderLine:
    def test_detail_id_optional(self):
        line = OrderLine(order_id=10248, product_id=11, quantity=12)
        assert line.order_detail_id is None
        assert line.quantity == 12

    def test_negative_quantity_rejected(self):
        with pytest.raises(Exception):
            OrderLine(order_id=10248, product_id=11, quantity=-1)


class TestPeople:
    def test_employee_full_name(self):
        employee = Employee(employee_id=1, first_name="Nancy", last_name="Davolio")
        assert employee.full_name == "Nancy Davolio"

    def test_customer_country(self):
        customer = Customer(customer_id=1, customer_name="Alfreds Futterkiste", country="Germany")
        assert customer.country == "Germany"
