"""Domain model for a Supplier entity."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Supplier:
    supplier_id: Optional[int]
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
    home_page: Optional[str] = None

    @property
    def id(self) -> Optional[int]:
        return self.supplier_id

    @property
    def display_name(self) -> str:
        return self.company_name

    @property
    def location(self) -> str:
        """'City, Country', or whichever part is known."""
        return ", ".join(part for part in (self.city, self.country) if part)

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Supplier":
        """Build a `Supplier` from a SQLite row (dict)."""
        return cls(
            supplier_id=row.get("supplier_id"),
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
            home_page=row.get("home_page"),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        doc = asdict(self)
        if self.supplier_id is None:
            doc.pop("supplier_id")
        return doc
