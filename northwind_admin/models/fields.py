"""Value converters shared by the domain models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from dateutil import parser as date_parser


def parse_date(value: Any) -> Optional[datetime]:
    """Convert various inputs → datetime | None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    try:
        # 07/04/1996, 4 Jul 1996, ...
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def date_to_sqlite(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "on")
    return bool(value)


def optional_float(value: Any) -> Optional[float]:
    return None if value is None or value == "" else float(value)


def optional_int(value: Any) -> Optional[int]:
    return None if value is None or value == "" else int(value)
