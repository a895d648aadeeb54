"""Northwind admin: paginated browsing and CRUD orchestration for a business dashboard."""

__version__ = "0.1.0"
