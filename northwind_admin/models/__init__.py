"""Northwind admin data models."""

from northwind_admin.models.actor import Actor
from northwind_admin.models.category import Category
from northwind_admin.models.customer import Customer
from northwind_admin.models.order import Order, OrderLine, OrderStatus
from northwind_admin.models.pagination import PageWindow
from northwind_admin.models.product import Product
from northwind_admin.models.query import Pagination, QueryDescriptor, SearchSpec, SortKey
from northwind_admin.models.supplier import Supplier

__all__ = [
    "Actor",
    "Category",
    "Customer",
    "Order",
    "OrderLine",
    "OrderStatus",
    "PageWindow",
    "Pagination",
    "Product",
    "QueryDescriptor",
    "SearchSpec",
    "SortKey",
    "Supplier",
]
