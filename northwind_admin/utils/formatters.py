"""
Formatting utility functions
"""

from datetime import datetime
from typing import Any, Union


def format_date(date_value: Any, format_str: str = "%Y-%m-%d") -> str:
    """
    Format a date value as a string

    Args:
        date_value: Date value to format (string, datetime, or other)
        format_str: Format string for strftime

    Returns:
        Formatted date string or empty string if missing
    """
    if not date_value:
        return ""

    if isinstance(date_value, str):
        try:
            dt = datetime.fromisoformat(date_value.replace('Z', '+00:00'))
            return dt.strftime(format_str)
        except ValueError:
            return date_value

    if isinstance(date_value, datetime):
        return date_value.strftime(format_str)

    return str(date_value)


def format_money(value: Union[str, int, float, None]) -> str:
    """
    Format a money value as a string

    Args:
        value: Money value to format

    Returns:
        "$1,234.50" style string, or "--" if missing
    """
    if value is None or value == "":
        return "--"

    if isinstance(value, str):
        try:
            value = float(value.replace("$", "").replace(",", "").strip())
        except ValueError:
            return value.strip() or "--"

    return f"${value:,.2f}"


def format_value(value: Any, date_format: str = "%Y-%m-%d") -> str:
    """Render any record field for a table cell or detail row."""
    if value is None or value == "":
        return "--"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return format_date(value, date_format)
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)
