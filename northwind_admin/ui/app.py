"""
Main Textual application class for the Northwind admin dashboard
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import App
from textual.binding import Binding

from northwind_admin.db.schema import create_schema, is_seeded, seed_sample_data
from northwind_admin.di import Container, build_container
from northwind_admin.entities import PROFILES, PROFILES_BY_NAME
from northwind_admin.ui.screens.entity_screen import EntityScreen
from northwind_admin.ui.screens.reports_screen import ReportsScreen
from simple_logger import Slogger


class NorthwindApp(App):
    """Terminal admin dashboard for the Northwind store."""

    TITLE = "Northwind Admin"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("1", "show('customers')", "Customers", show=True),
        Binding("2", "show('products')", "Products", show=True),
        Binding("3", "show('orders')", "Orders", show=True),
        Binding("4", "show('suppliers')", "Suppliers", show=True),
        Binding("5", "show('categories')", "Categories", show=True),
        Binding("6", "show('reports')", "Reports", show=True),
    ]

    # ------------------------------------------------------------------ #
    # init / mount
    # ------------------------------------------------------------------ #

    def __init__(
        self,
        config: Dict[str, Any],
        container: Optional[Container] = None,
        *,
        seed: bool = True,
    ) -> None:
        super().__init__()
        self.config = config
        self.container: Container = container or build_container(config)
        self.seed = seed

    def on_mount(self) -> None:
        db = self.container.db
        create_schema(db)
        if self.seed and not is_seeded(db):
            seed_sample_data(db)

        actor = self.container.identity.current_actor()
        Slogger.info("Northwind admin started", {"user": actor.username, "db": db.db_path})

        for profile in PROFILES:
            self.install_screen(
                EntityScreen(
                    profile,
                    self.container.browser(profile.name),
                    self.config,
                    actor,
                    report_service=self.container.report_service,
                ),
                name=profile.name,
            )
        self.install_screen(ReportsScreen(self.container.report_service), name="reports")

        self.push_screen(PROFILES[0].name)

    def on_unmount(self) -> None:
        self.container.close()

    # ------------------------------------------------------------------ #
    # key-binding actions
    # ------------------------------------------------------------------ #

    def action_show(self, name: str) -> None:
        if name != "reports" and name not in PROFILES_BY_NAME:
            return
        if self.screen.id == f"{name}_screen":
            return
        Slogger.debug(f"Switching to {name}")
        self.switch_screen(name)
