"""Domain models for orders and their line items."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from northwind_admin.models.fields import date_to_sqlite, optional_float, optional_int, parse_date


class OrderStatus(Enum):
    SHIPPED = "Shipped"
    OVERDUE = "Overdue"
    PENDING = "Pending"


@dataclass(frozen=True, slots=True)
class Order:
    order_id: Optional[int]
    customer_id: Optional[str] = None
    employee_id: Optional[int] = None
    order_date: Optional[datetime] = None
    required_date: Optional[datetime] = None
    shipped_date: Optional[datetime] = None
    ship_via: Optional[int] = None
    freight: Optional[float] = None
    ship_name: Optional[str] = None
    ship_address: Optional[str] = None
    ship_city: Optional[str] = None
    ship_region: Optional[str] = None
    ship_postal_code: Optional[str] = None
    ship_country: Optional[str] = None

    @property
    def id(self) -> Optional[int]:
        return self.order_id

    @property
    def display_name(self) -> str:
        return f"Order #{self.order_id}"

    def status(self, now: Optional[datetime] = None) -> OrderStatus:
        """Shipped once a ship date exists; overdue once the required date has passed."""
        if self.shipped_date:
            return OrderStatus.SHIPPED
        now = now or datetime.now()
        if self.required_date and now > self.required_date:
            return OrderStatus.OVERDUE
        return OrderStatus.PENDING

    # ---------- mappings ----------
    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Order":
        """Build an `Order` from a SQLite row (dict)."""
        return cls(
            order_id=row.get("order_id"),
            customer_id=row.get("customer_id"),
            employee_id=optional_int(row.get("employee_id")),
            order_date=parse_date(row.get("order_date")),
            required_date=parse_date(row.get("required_date")),
            shipped_date=parse_date(row.get("shipped_date")),
            ship_via=optional_int(row.get("ship_via")),
            freight=optional_float(row.get("freight")),
            ship_name=row.get("ship_name"),
            ship_address=row.get("ship_address"),
            ship_city=row.get("ship_city"),
            ship_region=row.get("ship_region"),
            ship_postal_code=row.get("ship_postal_code"),
            ship_country=row.get("ship_country"),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        """Convert to SQLite-ready dict."""
        doc = asdict(self)
        if self.order_id is None:
            doc.pop("order_id")
        for date_field in ("order_date", "required_date", "shipped_date"):
            doc[date_field] = date_to_sqlite(doc[date_field])
        return doc


@dataclass(frozen=True, slots=True)
class OrderLine:
    order_id: int
    product_id: int
    unit_price: float
    quantity: int
    discount: float = 0.0

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity * (1 - self.discount)

    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "OrderLine":
        return cls(
            order_id=int(row["order_id"]),
            product_id=int(row["product_id"]),
            unit_price=float(row.get("unit_price") or 0),
            quantity=int(row.get("quantity") or 0),
            discount=float(row.get("discount") or 0),
        )
