# northwind_admin/entities.py
"""
Per-entity configuration consumed by the generic entity screen: which
repository backs it, which columns the table shows, which quick filters exist.
Form fields and search fields come from the repository's column spec.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from northwind_admin.db.connection import SQLiteConnection
from northwind_admin.db.repos.base_repo import Column, SQLiteRepo
from northwind_admin.db.repos.category_repo import CategoryRepo
from northwind_admin.db.repos.customer_repo import CustomerRepo
from northwind_admin.db.repos.order_repo import OrderRepo
from northwind_admin.db.repos.product_repo import ProductRepo
from northwind_admin.db.repos.supplier_repo import SupplierRepo


@dataclass(frozen=True)
class QuickFilter:
    """A one-key filter toggle shown above the table."""

    label: str
    field: str
    value: Any


@dataclass(frozen=True)
class EntityProfile:
    name: str
    title: str
    singular: str
    repo_class: Type[SQLiteRepo]
    table_columns: Tuple[str, ...]
    quick_filters: Tuple[QuickFilter, ...] = ()

    @property
    def primary_key(self) -> str:
        return self.repo_class.primary_key

    @property
    def search_fields(self) -> Tuple[str, ...]:
        return self.repo_class.search_fields

    def build_repo(self, db: SQLiteConnection) -> SQLiteRepo:
        return self.repo_class(db)

    def column_title(self, field: str) -> str:
        if field == self.primary_key and field not in self.repo_class.columns:
            return "ID"
        column = self.repo_class.columns.get(field)
        return column.title(field) if column else field.replace("_", " ").capitalize()

    def form_fields(self, *, creating: bool) -> List[Tuple[str, Column]]:
        """Editable fields in display order. A client-assigned key is only editable on create."""
        fields = []
        for name, column in self.repo_class.columns.items():
            if name == self.primary_key and not creating:
                continue
            fields.append((name, column))
        return fields

    def detail_fields(self) -> List[str]:
        return [self.primary_key] + [
            name for name in self.repo_class.columns if name != self.primary_key
        ]


def record_id(record: Any) -> Any:
    return record.id


def value_of(record: Any, field: str) -> Any:
    """Field value, calling derived accessors such as Order.status()."""
    value = getattr(record, field, None)
    if callable(value):
        value = value()
    if isinstance(value, Enum):
        value = value.value
    return value


def form_value(record: Optional[Any], field: str) -> str:
    """A record field as the text a form input starts with."""
    if record is None:
        return ""
    value = getattr(record, field, None)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, datetime):
        return value.date().isoformat() if value.time() == datetime.min.time() else value.isoformat(" ")
    return str(value)


PROFILES: Tuple[EntityProfile, ...] = (
    EntityProfile(
        name="customers",
        title="Customers",
        singular="Customer",
        repo_class=CustomerRepo,
        table_columns=("customer_id", "company_name", "contact_name", "city", "country", "phone"),
    ),
    EntityProfile(
        name="products",
        title="Products",
        singular="Product",
        repo_class=ProductRepo,
        table_columns=(
            "product_id",
            "product_name",
            "quantity_per_unit",
            "unit_price",
            "units_in_stock",
            "reorder_level",
            "discontinued",
        ),
        quick_filters=(
            QuickFilter("In stock", "in_stock", True),
            QuickFilter("Low stock", "low_stock", True),
            QuickFilter("Active only", "discontinued", False),
        ),
    ),
    EntityProfile(
        name="orders",
        title="Orders",
        singular="Order",
        repo_class=OrderRepo,
        table_columns=(
            "order_id",
            "customer_id",
            "order_date",
            "required_date",
            "shipped_date",
            "freight",
            "ship_country",
            "status",
        ),
        quick_filters=(
            QuickFilter("Shipped", "shipped", True),
            QuickFilter("Not shipped", "shipped", False),
        ),
    ),
    EntityProfile(
        name="suppliers",
        title="Suppliers",
        singular="Supplier",
        repo_class=SupplierRepo,
        table_columns=("supplier_id", "company_name", "contact_name", "city", "country", "phone"),
    ),
    EntityProfile(
        name="categories",
        title="Categories",
        singular="Category",
        repo_class=CategoryRepo,
        table_columns=("category_id", "category_name", "description"),
    ),
)

PROFILES_BY_NAME: Dict[str, EntityProfile] = {profile.name: profile for profile in PROFILES}
