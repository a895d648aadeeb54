"""Domain model for a product Category."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Category:
    category_id: Optional[int]
    category_name: str
    description: Optional[str] = None

    @property
    def id(self) -> Optional[int]:
        return self.category_id

    @property
    def display_name(self) -> str:
        return self.category_name

    @classmethod
    def from_sqlite(cls, row: Dict[str, Any]) -> "Category":
        return cls(
            category_id=row.get("category_id"),
            category_name=row.get("category_name", ""),
            description=row.get("description"),
        )

    def to_sqlite(self) -> Dict[str, Any]:
        doc = asdict(self)
        if self.category_id is None:
            doc.pop("category_id")  # let SQLite assign
        return doc
