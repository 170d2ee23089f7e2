"""
Pydantic models for the Northwind snapshot.
Field aliases follow the Northwind column names so rows load straight from CSV or Snowflake.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NorthwindRecord(BaseModel):
    """Base for all snapshot rows: immutable, populated by alias or field name"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ============ Dimension Models ============

class Category(NorthwindRecord):
    """Maps to Categories table"""
    category_id: int = Field(..., alias="CategoryID", description="Category ID")
    category_name: str = Field(..., alias="CategoryName", description="Category name")


class Supplier(NorthwindRecord):
    """Maps to Suppliers table"""
    supplier_id: int = Field(..., alias="SupplierID", description="Supplier ID")
    supplier_name: str = Field(..., alias="SupplierName", description="Supplier name")


class Customer(NorthwindRecord):
    """Maps to Customers table"""
    customer_id: int = Field(..., alias="CustomerID", description="Customer ID")
    customer_name: str = Field(..., alias="CustomerName", description="Customer name")
    country: str = Field(..., alias="Country", description="Customer country")


class Employee(NorthwindRecord):
    """Maps to Employees table"""
    employee_id: int = Field(..., alias="EmployeeID", description="Employee ID")
    first_name: str = Field(..., alias="FirstName", description="First name")
    last_name: str = Field(..., alias="LastName", description="Last name")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Shipper(NorthwindRecord):
    """Maps to Shippers table"""
    shipper_id: int = Field(..., alias="ShipperID", description="Shipper ID")
    shipper_name: str = Field(..., alias="ShipperName", description="Shipper name")


# ============ Fact Models ============

class Product(NorthwindRecord):
    """Maps to Products table"""
    product_id: int = Field(..., alias="ProductID", description="Product ID")
    product_name: str = Field(..., alias="ProductName", description="Product name")
    supplier_id: int = Field(..., alias="SupplierID", description="Supplier ID (references Suppliers)")
    category_id: int = Field(..., alias="CategoryID", description="Category ID (references Categories)")
    unit: Optional[str] = Field(None, alias="Unit", description="Packaging unit")
    price: Decimal = Field(..., alias="Price", ge=0, description="Current unit price")

    @field_validator("price", mode="before")
    @classmethod
    def _float_price_as_decimal(cls, value):
        # Go through str so 18.4 becomes Decimal("18.4"), not its binary expansion
        if isinstance(value, float):
            return Decimal(str(value))
        return value


class Order(NorthwindRecord):
    """Maps to Orders table"""
    order_id: int = Field(..., alias="OrderID", description="Order ID")
    customer_id: int = Field(..., alias="CustomerID", description="Customer ID (references Customers)")
    employee_id: int = Field(..., alias="EmployeeID", description="Employee ID (references Employees)")
    shipper_id: int = Field(..., alias="ShipperID", description="Shipper ID (references Shippers)")
    order_date: date = Field(..., alias="OrderDate", description="Order date")

    @field_validator("order_date", mode="before")
    @classmethod
    def _datetime_as_date(cls, value):
        # Snowflake and pandas hand back timestamps; only the calendar date matters
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            # "1996-07-04 00:00:00" style exports
            return datetime.fromisoformat(value).date()
        return value


# ============ Bridge/Detail Models ============

class OrderLine(NorthwindRecord):
    """Maps to OrderDetails table"""
    order_detail_id: Optional[int] = Field(None, alias="OrderDetailID", description="Order detail ID")
    order_id: int = Field(..., alias="OrderID", description="Order ID (references Orders)")
    product_id: int = Field(..., alias="ProductID", description="Product ID (references Products)")
    quantity: int = Field(..., alias="Quantity", ge=0, description="Quantity ordered")
