"""Domain model for a Customer entity."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Customer:
    customer_id: str
    company_name: str
    contact_name: Optional[str] = None
    contact_title: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None

    @property
    def id(self) -> str:
        return self.customer_id

    @property
    def display_name(self) -> str:
        return self.company_name

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Customer":
        """Build a `Customer` from a SQLite row (dict)."""
        return cls(
            customer_id=str(row.get("customer_id", "")),
            company_name=row.get("company_name", ""),
            contact_name=row.get("contact_name"),
            contact_title=row.get("contact_title"),
            address=row.get("address"),
            city=row.get("city"),
            region=row.get("region"),
            postal_code=row.get("postal_code"),
            country=row.get("country"),
            phone=row.get("phone"),
            fax=row.get("fax"),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        """Convert to SQLite-ready dict. The key is client-assigned, so it is kept."""
        return asdict(self)
