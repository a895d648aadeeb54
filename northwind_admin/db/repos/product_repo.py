# northwind_admin/db/repos/product_repo.py
"""
Repository for product operations – returns `Product` domain models.
"""

from __future__ import annotations

from typing import Any, Dict

from northwind_admin.db.repos.base_repo import Clauses, Column, SQLiteRepo
from northwind_admin.models.fields import parse_bool
from northwind_admin.models.product import Product

SMALLINT_MAX = 32767


class ProductRepo(SQLiteRepo[Product]):
    """CRUD access for Product records, plus stock-level filters."""

    table = "products"
    primary_key = "product_id"
    model = Product
    columns = {
        "product_name": Column(str, required=True, max_length=40),
        "supplier_id": Column(int, minimum=1, label="Supplier"),
        "category_id": Column(int, minimum=1, label="Category"),
        "quantity_per_unit": Column(str, max_length=20),
        "unit_price": Column(float, minimum=0, maximum=999999.99),
        "units_in_stock": Column(int, minimum=0, maximum=SMALLINT_MAX),
        "units_on_order": Column(int, minimum=0, maximum=SMALLINT_MAX),
        "reorder_level": Column(int, minimum=0, maximum=SMALLINT_MAX),
        "discontinued": Column(bool),
    }
    search_fields = ("product_name", "quantity_per_unit")
    special_filters = ("in_stock", "low_stock")

    def _special_clauses(self, filters: Dict[str, Any]) -> Clauses:
        clauses, params = [], []

        in_stock = filters.get("in_stock")
        if in_stock is not None and in_stock != "":
            clauses.append("units_in_stock > 0" if parse_bool(in_stock) else "COALESCE(units_in_stock, 0) = 0")

        low_stock = filters.get("low_stock")
        if low_stock is not None and low_stock != "" and parse_bool(low_stock):
            clauses.append("discontinued = 0 AND COALESCE(units_in_stock, 0) <= reorder_level")

        return clauses, params
