# northwind_admin/errors.py
"""Error kinds raised by repositories and surfaced by the coordinators."""

from __future__ import annotations

from typing import Any, Optional


class DashboardError(Exception):
    """Base class for all dashboard errors."""

    retryable = False

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DashboardError):
    """Input rejected by the repository; shown inline, view state unchanged."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(DashboardError):
    """The referenced record no longer exists."""

    def __init__(self, message: str, record_id: Any = None) -> None:
        super().__init__(message)
        self.record_id = record_id


class TransportError(DashboardError):
    """Backend or storage failure. Safe to retry."""

    retryable = True


class AuthorizationError(DashboardError):
    """The current actor may not perform the operation."""
    pass


class ConfigError(DashboardError):
    """Error related to configuration."""
    pass
