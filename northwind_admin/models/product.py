"""Domain model for a Product entity."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from northwind_admin.models.fields import optional_float, optional_int, parse_bool


@dataclass(frozen=True, slots=True)
class Product:
    product_id: Optional[int]
    product_name: str
    supplier_id: Optional[int] = None
    category_id: Optional[int] = None
    quantity_per_unit: Optional[str] = None
    unit_price: Optional[float] = None
    units_in_stock: Optional[int] = None
    units_on_order: Optional[int] = None
    reorder_level: Optional[int] = None
    discontinued: bool = False

    @property
    def id(self) -> Optional[int]:
        return self.product_id

    @property
    def display_name(self) -> str:
        return self.product_name

    @property
    def is_low_stock(self) -> bool:
        """At or below the reorder level (discontinued products never are)."""
        if self.discontinued or self.reorder_level is None:
            return False
        return (self.units_in_stock or 0) <= self.reorder_level

    @property
    def stock_value(self) -> float:
        return (self.unit_price or 0.0) * (self.units_in_stock or 0)

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Product":
        """Build a `Product` from a SQLite row (dict)."""
        return cls(
            product_id=row.get("product_id"),
            product_name=row.get("product_name", ""),
            supplier_id=optional_int(row.get("supplier_id")),
            category_id=optional_int(row.get("category_id")),
            quantity_per_unit=row.get("quantity_per_unit"),
            unit_price=optional_float(row.get("unit_price")),
            units_in_stock=optional_int(row.get("units_in_stock")),
            units_on_order=optional_int(row.get("units_on_order")),
            reorder_level=optional_int(row.get("reorder_level")),
            discontinued=parse_bool(row.get("discontinued", 0)),  # SQLite stores 0/1
        )

    def to_sqlite(self) -> Dict[str, Any]:
        doc = asdict(self)
        if self.product_id is None:
            doc.pop("product_id")
        doc["discontinued"] = 1 if self.discontinued else 0
        return doc
