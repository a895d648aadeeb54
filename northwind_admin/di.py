# northwind_admin/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Dict

from northwind_admin.db.connection import SQLiteConnection
from northwind_admin.db.repos.base_repo import SQLiteRepo
from northwind_admin.db.repos.report_repo import ReportRepo
from northwind_admin.entities import PROFILES_BY_NAME, record_id
from northwind_admin.services.entity_browser import EntityBrowser
from northwind_admin.services.identity import EnvIdentityProvider, IdentityProvider
from northwind_admin.services.report_service import ReportService


class Container:
    """Holds lazily-created singletons: one repository and one browser per entity."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self._cfg = config
        self._db: SQLiteConnection | None = None
        self._repos: Dict[str, SQLiteRepo] = {}
        self._browsers: Dict[str, EntityBrowser] = {}
        self._report_repo: ReportRepo | None = None
        self._report_service: ReportService | None = None
        self._identity: IdentityProvider | None = None

    # ---------- infra ----------
    @property
    def db(self) -> SQLiteConnection:
        if self._db is None:
            self._db = SQLiteConnection(self._cfg)
        return self._db

    # ---------- repositories ----------
    def repo(self, entity: str) -> SQLiteRepo:
        if entity not in self._repos:
            self._repos[entity] = PROFILES_BY_NAME[entity].build_repo(self.db)
        return self._repos[entity]

    @property
    def report_repo(self) -> ReportRepo:
        if self._report_repo is None:
            self._report_repo = ReportRepo(self.db)
        return self._report_repo

    # ---------- services ----------
    def browser(self, entity: str) -> EntityBrowser:
        if entity not in self._browsers:
            ui = self._cfg.get("ui", {})
            self._browsers[entity] = EntityBrowser(
                entity,
                self.repo(entity),
                id_of=record_id,
                search_fields=PROFILES_BY_NAME[entity].search_fields,
                per_page=ui.get("per_page", 20),
                max_visible=ui.get("max_visible_pages", 5),
                stale_after=self._cfg.get("cache", {}).get("stale_seconds", 300),
            )
        return self._browsers[entity]

    @property
    def report_service(self) -> ReportService:
        if self._report_service is None:
            self._report_service = ReportService(self.report_repo)
        return self._report_service

    @property
    def identity(self) -> IdentityProvider:
        if self._identity is None:
            self._identity = EnvIdentityProvider()
        return self._identity

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
