# northwind_admin/db/repos/customer_repo.py
"""
Repository for customer operations – returns `Customer` domain models.
"""

from __future__ import annotations

from typing import Any, Dict

from northwind_admin.db.repos.base_repo import Column, SQLiteRepo
from northwind_admin.models.customer import Customer


class CustomerRepo(SQLiteRepo[Customer]):
    """CRUD access for Customer records. Customer ids are chosen by the user."""

    table = "customers"
    primary_key = "customer_id"
    auto_key = False
    model = Customer
    columns = {
        "customer_id": Column(str, required=True, max_length=5, pattern=r"[A-Z0-9]+", label="Customer ID"),
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
    }
    search_fields = ("company_name", "contact_name", "city", "country")

    def _clean(self, data):
        doc: Dict[str, Any] = dict(data)
        if isinstance(doc.get("customer_id"), str):
            doc["customer_id"] = doc["customer_id"].strip().upper()
        return super()._clean(doc)
