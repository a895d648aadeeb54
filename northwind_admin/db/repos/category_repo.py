# northwind_admin/db/repos/category_repo.py
"""
Repository for product categories.
"""

from __future__ import annotations

from northwind_admin.db.repos.base_repo import Column, SQLiteRepo
from northwind_admin.models.category import Category


class CategoryRepo(SQLiteRepo[Category]):
    """CRUD access for Category records."""

    table = "categories"
    primary_key = "category_id"
    model = Category
    columns = {
        "category_name": Column(str, required=True, max_length=15),
        "description": Column(str),
    }
    search_fields = ("category_name", "description")
