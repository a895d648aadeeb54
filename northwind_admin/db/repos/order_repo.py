# northwind_admin/db/repos/order_repo.py
"""
Repository for orders and their line items.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from northwind_admin.db.repos.base_repo import Clauses, Column, SQLiteRepo, translate_errors
from northwind_admin.errors import ValidationError
from northwind_admin.models.fields import parse_bool, parse_date
from northwind_admin.models.order import Order, OrderLine
from northwind_admin.models.query import SortKey


class OrderRepo(SQLiteRepo[Order]):
    """CRUD access for Order records; newest orders first by default."""

    table = "orders"
    primary_key = "order_id"
    model = Order
    columns = {
        "customer_id": Column(str, required=True, max_length=5, label="Customer"),
        "employee_id": Column(int, minimum=1, label="Employee"),
        "order_date": Column(datetime),
        "required_date": Column(datetime),
        "shipped_date": Column(datetime),
        "ship_via": Column(int, minimum=1, label="Shipper"),
        "freight": Column(float, minimum=0),
        "ship_name": Column(str, max_length=40),
        "ship_address": Column(str, max_length=60),
        "ship_city": Column(str, max_length=15),
        "ship_region": Column(str, max_length=15),
        "ship_postal_code": Column(str, max_length=10),
        "ship_country": Column(str, max_length=15),
    }
    search_fields = ("customer_id", "ship_name", "ship_city", "ship_country")
    default_sort = (SortKey("order_id", descending=True),)
    special_filters = ("date_from", "date_to", "shipped")

    def _special_clauses(self, filters: Dict[str, Any]) -> Clauses:
        clauses: List[str] = []
        params: List[Any] = []

        for key, op in (("date_from", ">="), ("date_to", "<=")):
            raw = filters.get(key)
            if raw is None or raw == "":
                continue
            value = parse_date(raw)
            if value is None:
                raise ValidationError(f"{key} is not a valid date", field=key)
            # day granularity: both ends inclusive
            clauses.append(f"substr(order_date, 1, 10) {op} ?")
            params.append(value.date().isoformat())

        shipped = filters.get("shipped")
        if shipped is not None and shipped != "":
            clauses.append("shipped_date IS NOT NULL" if parse_bool(shipped) else "shipped_date IS NULL")

        return clauses, params

    def _validate(self, doc, current=None):
        values = {**(current or {}), **doc}
        order_date = parse_date(values.get("order_date"))
        for key in ("required_date", "shipped_date"):
            if "order_date" not in doc and key not in doc:
                continue
            other = parse_date(values.get(key))
            if order_date and other and other < order_date:
                raise ValidationError(f"{key.replace('_', ' ').capitalize()} cannot be before the order date", field=key)

    # ---------- line items ------------------------------------------------

    async def lines(self, order_id: int) -> List[OrderLine]:
        """Line items of one order, in product order."""
        with translate_errors(self._db, "OrderRepo.lines"):
            cursor = self._db.cursor()
            cursor.execute(
                "SELECT * FROM order_details WHERE order_id = ? ORDER BY product_id", (order_id,)
            )
            return [OrderLine.from_sqlite(dict(row)) for row in cursor.fetchall()]

    async def order_total(self, order_id: int) -> float:
        return sum(line.line_total for line in await self.lines(order_id))
