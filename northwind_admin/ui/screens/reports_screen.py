# northwind_admin/ui/screens/reports_screen.py
"""
Reports screen: order, sales and inventory summaries.
"""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from northwind_admin.db.repos.report_repo import CustomerOrderStats
from northwind_admin.errors import DashboardError
from northwind_admin.services.report_service import DashboardSummary, ReportService
from northwind_admin.utils.formatters import format_date, format_money
from simple_logger import Slogger


def render_summary(summary: DashboardSummary) -> Group:
    """Rich renderable for a DashboardSummary."""
    orders = summary.orders
    inventory = summary.inventory

    headline = Columns(
        [
            Panel(f"[b]{orders.total_orders}[/b]\n{orders.pending_orders} pending", title="Orders"),
            Panel(f"[b]{format_money(orders.total_revenue)}[/b]", title="Revenue"),
            Panel(f"[b]{format_money(orders.average_order_value)}[/b]", title="Avg. order"),
            Panel(
                f"[b]{format_money(inventory.total_value)}[/b]\n{inventory.total_units} units",
                title="Stock value",
            ),
        ],
        equal=True,
    )

    top = Table(title="Top selling products", expand=True)
    top.add_column("Product")
    top.add_column("Qty sold", justify="right")
    top.add_column("Revenue", justify="right")
    for row in summary.top_products:
        top.add_row(row.product_name, str(row.quantity_sold), format_money(row.revenue))

    alerts = Table(title="Reorder alerts", expand=True)
    alerts.add_column("Product")
    alerts.add_column("In stock", justify="right")
    alerts.add_column("On order", justify="right")
    alerts.add_column("Reorder level", justify="right")
    alerts.add_column("Shortfall", justify="right")
    for alert in summary.reorder_alerts:
        alerts.add_row(
            alert.product_name,
            str(alert.units_in_stock),
            str(alert.units_on_order),
            str(alert.reorder_level),
            str(alert.shortfall),
        )
    if not summary.reorder_alerts:
        alerts.add_row("No products need reordering", "", "", "", "")

    return Group(headline, top, alerts)


def render_customer_summary(stats: CustomerOrderStats, date_format: str = "%Y-%m-%d") -> Table:
    """Order history block shown under a customer's fields."""
    table = Table(title="Order history", expand=False, show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Orders", str(stats.total_orders))
    table.add_row("Total spent", format_money(stats.total_amount))
    table.add_row("Avg. order", format_money(stats.average_order_value))
    table.add_row("Last order", format_date(stats.last_order_date, date_format) or "never")
    return table


class ReportsScreen(Screen):
    """Dashboard summary for the whole store."""

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(self, report_service: ReportService, *, id: str = "reports_screen") -> None:
        super().__init__(id=id)
        self.report_service = report_service

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll():
            yield Static("Loading reports...", id="report-body")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Reports"
        self.action_refresh()

    def on_screen_resume(self, event) -> None:
        self.action_refresh()

    def action_refresh(self) -> None:
        self.run_worker(self.load_reports(), group="reports", exclusive=True)

    async def load_reports(self) -> None:
        body = self.query_one("#report-body", Static)
        try:
            summary = await self.report_service.dashboard()
        except DashboardError as e:
            Slogger.error(f"Reports: {e.message}")
            body.update(f"Could not load reports: {e.message}")
            self.notify(e.message, title="Error", severity="error")
            return
        body.update(render_summary(summary))
