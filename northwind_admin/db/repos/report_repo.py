# northwind_admin/db/repos/report_repo.py
"""
Read-only aggregate queries behind the Reports page.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Tuple

from northwind_admin.db.connection import SQLiteConnection
from northwind_admin.db.repos.base_repo import translate_errors
from northwind_admin.models.fields import parse_date

LINE_TOTAL = "od.unit_price * od.quantity * (1 - od.discount)"


@dataclass(frozen=True, slots=True)
class OrderStats:
    total_orders: int
    total_revenue: float
    average_order_value: float
    pending_orders: int
    shipped_orders: int


@dataclass(frozen=True, slots=True)
class ProductSales:
    product_id: int
    product_name: str
    quantity_sold: int
    revenue: float


@dataclass(frozen=True, slots=True)
class InventoryValuation:
    total_products: int
    total_units: int
    total_value: float
    discontinued_products: int


@dataclass(frozen=True, slots=True)
class ReorderAlert:
    product_id: int
    product_name: str
    units_in_stock: int
    units_on_order: int
    reorder_level: int

    @property
    def shortfall(self) -> int:
        return max(self.reorder_level - self.units_in_stock - self.units_on_order, 0)


@dataclass(frozen=True, slots=True)
class CustomerOrderStats:
    total_orders: int
    total_amount: float
    average_order_value: float
    last_order_date: Optional[datetime]


def _date_range(date_from: Optional[datetime], date_to: Optional[datetime]) -> Tuple[str, List[Any]]:
    clauses, params = [], []
    if date_from:
        clauses.append("substr(o.order_date, 1, 10) >= ?")
        params.append(date_from.date().isoformat())
    if date_to:
        clauses.append("substr(o.order_date, 1, 10) <= ?")
        params.append(date_to.date().isoformat())
    return (f" WHERE {' AND '.join(clauses)}" if clauses else ""), params


class ReportRepo:
    """Aggregates over orders, order lines and products."""

    def __init__(self, db: SQLiteConnection) -> None:
        self._db = db

    def _fetchall(self, action: str, sql: str, params: List[Any] | Tuple[Any, ...] = ()):
        with translate_errors(self._db, f"ReportRepo.{action}"):
            cursor = self._db.cursor()
            cursor.execute(sql, params)
            return cursor.fetchall()

    async def order_stats(
        self, date_from: Optional[datetime] = None, date_to: Optional[datetime] = None
    ) -> OrderStats:
        """Order counts and revenue, optionally within an order-date range."""
        where, params = _date_range(date_from, date_to)
        row = self._fetchall(
            "order_stats",
            f"""
            SELECT
                COUNT(*) AS total_orders,
                COALESCE(SUM(t.amount), 0) AS total_revenue,
                SUM(CASE WHEN t.shipped_date IS NULL THEN 1 ELSE 0 END) AS pending_orders,
                SUM(CASE WHEN t.shipped_date IS NOT NULL THEN 1 ELSE 0 END) AS shipped_orders
            FROM (
                SELECT o.order_id, o.shipped_date, SUM({LINE_TOTAL}) AS amount
                FROM orders o
                LEFT JOIN order_details od ON o.order_id = od.order_id
                {where}
                GROUP BY o.order_id
            ) t
            """,
            params,
        )[0]
        total_orders = row["total_orders"] or 0
        revenue = float(row["total_revenue"] or 0)
        return OrderStats(
            total_orders=total_orders,
            total_revenue=revenue,
            average_order_value=revenue / total_orders if total_orders else 0.0,
            pending_orders=row["pending_orders"] or 0,
            shipped_orders=row["shipped_orders"] or 0,
        )

    async def top_selling_products(self, limit: int = 10) -> List[ProductSales]:
        rows = self._fetchall(
            "top_selling_products",
            f"""
            SELECT p.product_id, p.product_name,
                   SUM(od.quantity) AS quantity_sold,
                   SUM({LINE_TOTAL}) AS revenue
            FROM order_details od
            JOIN products p ON p.product_id = od.product_id
            GROUP BY p.product_id, p.product_name
            ORDER BY revenue DESC
            LIMIT ?
            """,
            (limit,),
        )
        return [
            ProductSales(
                product_id=row["product_id"],
                product_name=row["product_name"],
                quantity_sold=row["quantity_sold"] or 0,
                revenue=float(row["revenue"] or 0),
            )
            for row in rows
        ]

    async def inventory_valuation(self) -> InventoryValuation:
        row = self._fetchall(
            "inventory_valuation",
            """
            SELECT COUNT(*) AS total_products,
                   COALESCE(SUM(units_in_stock), 0) AS total_units,
                   COALESCE(SUM(unit_price * units_in_stock), 0) AS total_value,
                   COALESCE(SUM(discontinued), 0) AS discontinued_products
            FROM products
            """,
        )[0]
        return InventoryValuation(
            total_products=row["total_products"],
            total_units=row["total_units"],
            total_value=float(row["total_value"]),
            discontinued_products=row["discontinued_products"],
        )

    async def reorder_alerts(self) -> List[ReorderAlert]:
        """Active products at or below their reorder level."""
        rows = self._fetchall(
            "reorder_alerts",
            """
            SELECT product_id, product_name,
                   COALESCE(units_in_stock, 0) AS units_in_stock,
                   COALESCE(units_on_order, 0) AS units_on_order,
                   COALESCE(reorder_level, 0) AS reorder_level
            FROM products
            WHERE discontinued = 0 AND COALESCE(units_in_stock, 0) <= COALESCE(reorder_level, 0)
            ORDER BY units_in_stock ASC, product_id ASC
            """,
        )
        return [ReorderAlert(**dict(row)) for row in rows]

    async def customer_order_stats(self, customer_id: str) -> CustomerOrderStats:
        row = self._fetchall(
            "customer_order_stats",
            f"""
            SELECT COUNT(DISTINCT o.order_id) AS total_orders,
                   COALESCE(SUM({LINE_TOTAL}), 0) AS total_amount,
                   MAX(o.order_date) AS last_order_date
            FROM orders o
            LEFT JOIN order_details od ON o.order_id = od.order_id
            WHERE o.customer_id = ?
            """,
            (customer_id,),
        )[0]
        total_orders = row["total_orders"] or 0
        amount = float(row["total_amount"] or 0)
        return CustomerOrderStats(
            total_orders=total_orders,
            total_amount=amount,
            average_order_value=amount / total_orders if total_orders else 0.0,
            last_order_date=parse_date(row["last_order_date"]),
        )
