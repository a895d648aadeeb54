# northwind_admin/services/report_service.py
"""
Business-logic layer for the Reports page.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from northwind_admin.db.repos.report_repo import (
    CustomerOrderStats,
    InventoryValuation,
    OrderStats,
    ProductSales,
    ReorderAlert,
    ReportRepo,
)
from northwind_admin.errors import ValidationError


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    orders: OrderStats
    top_products: Tuple[ProductSales, ...]
    inventory: InventoryValuation
    reorder_alerts: Tuple[ReorderAlert, ...]


class ReportService:
    """Bundles the report queries the dashboard shows together."""

    def __init__(self, report_repo: ReportRepo, *, top_products: int = 5) -> None:
        self._reports = report_repo
        self._top_products = top_products

    async def dashboard(
        self, date_from: Optional[datetime] = None, date_to: Optional[datetime] = None
    ) -> DashboardSummary:
        if date_from and date_to and date_from > date_to:
            raise ValidationError("Start date must be on or before the end date", field="date_from")
        return DashboardSummary(
            orders=await self._reports.order_stats(date_from, date_to),
            top_products=tuple(await self._reports.top_selling_products(self._top_products)),
            inventory=await self._reports.inventory_valuation(),
            reorder_alerts=tuple(await self._reports.reorder_alerts()),
        )

    async def top_selling_products(self, limit: int = 10) -> List[ProductSales]:
        if limit < 1:
            raise ValidationError("Limit must be at least 1", field="limit")
        return await self._reports.top_selling_products(limit)

    async def customer_summary(self, customer_id: str) -> CustomerOrderStats:
        return await self._reports.customer_order_stats(customer_id)
