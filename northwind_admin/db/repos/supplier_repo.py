# northwind_admin/db/repos/supplier_repo.py
"""
Repository for supplier operations – returns `Supplier` domain models.
"""

from __future__ import annotations

from northwind_admin.db.repos.base_repo import Column, SQLiteRepo
from northwind_admin.errors import ValidationError
from northwind_admin.models.supplier import Supplier


class SupplierRepo(SQLiteRepo[Supplier]):
    """CRUD access for Supplier records."""

    table = "suppliers"
    primary_key = "supplier_id"
    model = Supplier
    columns = {
        "company_name": Column(str, required=True, max_length=40),
        "contact_name": Column(str, max_length=30),
        "contact_title": Column(str, max_length=30),
        "address": Column(str, max_length=60),
        "city": Column(str, max_length=15),
        "region": Column(str, max_length=15),
        "postal_code": Column(str, max_length=10),
        "country": Column(str, max_length=15),
        "phone": Column(str, max_length=24),
        "fax": Column(str, max_length=24),
        "home_page": Column(str, label="Home page"),
    }
    search_fields = ("company_name", "contact_name", "city", "country")

    def _validate(self, doc, current=None):
        home_page = doc.get("home_page")
        if home_page and not home_page.startswith(("http://", "https://")):
            raise ValidationError("Home page must be an http(s) URL", field="home_page")
