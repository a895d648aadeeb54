# northwind_admin/db/repos/base_repo.py
"""
Shared SQLite repository: paginated listing with search / filters / sort and
validated CRUD. Entity repositories configure it with a table, a model and a
column spec.
"""

from __future__ import annotations

import re
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Any,
    Dict,
    Generic,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
)

from northwind_admin.db.connection import SQLiteConnection
from northwind_admin.errors import NotFoundError, TransportError, ValidationError
from northwind_admin.models.fields import parse_bool, parse_date
from northwind_admin.models.pagination import PageWindow, total_pages_for
from northwind_admin.models.query import QueryDescriptor, SortKey
from simple_logger import Slogger

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

Clauses = Tuple[List[str], List[Any]]


class EntityRepository(Protocol[T_co]):
    """What the coordinators need from a backing store for one record type."""

    async def list(self, query: QueryDescriptor) -> PageWindow[T_co]: ...

    async def by_id(self, record_id: Any) -> Optional[T_co]: ...

    async def create(self, data: Mapping[str, Any]) -> T_co: ...

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> T_co: ...

    async def delete(self, record_id: Any) -> None: ...


@dataclass(frozen=True)
class Column:
    """Type and constraints of one writable column."""

    kind: type = str
    required: bool = False
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    pattern: Optional[str] = None
    label: Optional[str] = None

    def title(self, name: str) -> str:
        return self.label or name.replace("_", " ").capitalize()


@contextmanager
def translate_errors(db: SQLiteConnection, action: str) -> Iterator[None]:
    """Map sqlite3 failures onto dashboard error kinds (rolling back the transaction)."""
    try:
        yield
    except sqlite3.IntegrityError as e:
        db.rollback()
        Slogger.warning(f"{action}: constraint violated: {e}")
        raise ValidationError(f"{action} rejected: {e}") from e
    except sqlite3.Error as e:
        db.rollback()
        Slogger.exception(e, f"{action} failed")
        raise TransportError(f"{action} failed: {e}") from e


def escape_like(text: str) -> str:
    """Make `text` match literally inside a LIKE pattern escaped with a backslash."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLiteRepo(Generic[T]):
    """CRUD access for one table, returning domain models."""

    table: str = ""
    primary_key: str = "id"
    auto_key: bool = True                   # False when the key is client-assigned
    columns: Dict[str, Column] = {}
    default_sort: Tuple[SortKey, ...] = ()
    search_fields: Tuple[str, ...] = ()
    special_filters: Tuple[str, ...] = ()   # handled by _special_clauses
    model: Any = None                       # domain class exposing from_sqlite()

    def __init__(self, db: SQLiteConnection, table_name: Optional[str] = None) -> None:
        self._db = db
        self._table = table_name or self.table

    def from_row(self, row: Dict[str, Any]) -> T:
        return self.model.from_sqlite(row)

    # ---------- read side --------------------------------------------------

    async def list(self, query: QueryDescriptor) -> PageWindow[T]:
        """Return one page of records; a page past the end is clamped to the last one."""
        where, params = self._where(query)
        limit = query.limit
        total = await self.count(query)

        with translate_errors(self._db, f"{type(self).__name__}.list"):
            cursor = self._db.cursor()
            page = min(query.page, max(total_pages_for(total, limit), 1))
            offset = (page - 1) * limit

            cursor.execute(
                f"SELECT * FROM {self._table}{where}{self._order_by(query.sort)} LIMIT ? OFFSET ?",
                [*params, limit, offset],
            )
            rows = cursor.fetchall()

        Slogger.debug(
            f"{type(self).__name__}.list: {len(rows)} of {total} rows",
            {"page": page, "requested_page": query.page, "limit": limit},
        )
        return PageWindow.from_total(
            [self.from_row(dict(row)) for row in rows], page=page, limit=limit, total=total
        )

    async def count(self, query: QueryDescriptor) -> int:
        where, params = self._where(query)
        with translate_errors(self._db, f"{type(self).__name__}.count"):
            cursor = self._db.cursor()
            cursor.execute(f"SELECT COUNT(*) FROM {self._table}{where}", params)
            return cursor.fetchone()[0]

    async def by_id(self, record_id: Any) -> Optional[T]:
        """Find a record by primary key and return a model (or None)."""
        row = self._stored_row(record_id)
        return self.from_row(row) if row is not None else None

    def _stored_row(self, record_id: Any) -> Optional[Dict[str, Any]]:
        with translate_errors(self._db, f"{type(self).__name__}.by_id"):
            cursor = self._db.cursor()
            cursor.execute(
                f"SELECT * FROM {self._table} WHERE {self.primary_key} = ?", (record_id,)
            )
            row = cursor.fetchone()
        return dict(row) if row else None

    # ---------- write side -------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> T:
        """Insert a new record; returns the stored model (with its generated key)."""
        if self.auto_key:
            data = {k: v for k, v in data.items() if k != self.primary_key}
        doc = self._clean(data)
        self._check_required(doc, creating=True)
        self._validate(doc)

        fields = ", ".join(doc.keys())
        placeholders = ", ".join(["?"] * len(doc))
        name = f"{type(self).__name__}.create"

        with translate_errors(self._db, name):
            cursor = self._db.cursor()
            cursor.execute(
                f"INSERT INTO {self._table} ({fields}) VALUES ({placeholders})", list(doc.values())
            )
            self._db.commit()
            new_id = cursor.lastrowid if self.auto_key else doc[self.primary_key]

        Slogger.info(f"{name}: stored {self.primary_key}={new_id}")
        stored = await self.by_id(new_id)
        if stored is None:
            raise TransportError(f"{name}: record {new_id} missing after insert")
        return stored

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> T:
        """Partial update; returns the updated model."""
        name = f"{type(self).__name__}.update"
        data = dict(data)
        requested_key = data.pop(self.primary_key, None)
        if requested_key not in (None, "") and str(requested_key).strip() != str(record_id):
            raise ValidationError("The record key cannot be changed", field=self.primary_key)
        doc = self._clean(data)

        if not doc:
            Slogger.debug(f"{name}: no changes for {self.primary_key}={record_id}")
            current = await self.by_id(record_id)
            if current is None:
                raise NotFoundError(f"No record with {self.primary_key}={record_id}", record_id)
            return current

        self._check_required(doc, creating=False)
        current = self._stored_row(record_id)
        if current is None:
            Slogger.warning(f"{name}: no record with {self.primary_key}={record_id}")
            raise NotFoundError(f"No record with {self.primary_key}={record_id}", record_id)
        self._validate(doc, current)

        set_clause = ", ".join(f"{key} = ?" for key in doc)
        with translate_errors(self._db, name):
            cursor = self._db.cursor()
            cursor.execute(
                f"UPDATE {self._table} SET {set_clause} WHERE {self.primary_key} = ?",
                [*doc.values(), record_id],
            )
            self._db.commit()
            updated = cursor.rowcount > 0

        if not updated:
            Slogger.warning(f"{name}: no record with {self.primary_key}={record_id}")
            raise NotFoundError(f"No record with {self.primary_key}={record_id}", record_id)

        Slogger.info(f"{name}: updated {self.primary_key}={record_id}", {"fields": ", ".join(doc)})
        stored = await self.by_id(record_id)
        if stored is None:
            raise NotFoundError(f"No record with {self.primary_key}={record_id}", record_id)
        return stored

    async def delete(self, record_id: Any) -> None:
        """Delete a record; fails if it does not exist or is still referenced."""
        name = f"{type(self).__name__}.delete"
        with translate_errors(self._db, name):
            cursor = self._db.cursor()
            cursor.execute(f"DELETE FROM {self._table} WHERE {self.primary_key} = ?", (record_id,))
            self._db.commit()
            deleted = cursor.rowcount > 0

        if not deleted:
            Slogger.warning(f"{name}: no record with {self.primary_key}={record_id}")
            raise NotFoundError(f"No record with {self.primary_key}={record_id}", record_id)
        Slogger.info(f"{name}: deleted {self.primary_key}={record_id}")

    # ------------------------------------------------------------------ #
    # query building
    # ------------------------------------------------------------------ #

    def _where(self, query: QueryDescriptor) -> Tuple[str, List[Any]]:
        filters = query.filter_map()
        clauses, params = self._special_clauses(
            {k: filters.pop(k) for k in self.special_filters if k in filters}
        )

        for field, value in filters.items():
            if value is None or value == "":
                continue
            self._check_field(field, "filter")
            if isinstance(value, (tuple, list)):
                if not value:
                    clauses.append("1 = 0")
                    continue
                clauses.append(f"{field} IN ({', '.join(['?'] * len(value))})")
                params.extend(self._to_param(v) for v in value)
            elif isinstance(value, str) and "%" in value:
                clauses.append(f"{field} LIKE ?")
                params.append(value)
            else:
                clauses.append(f"{field} = ?")
                params.append(self._to_param(value))

        search = query.search
        if search and search.query and search.fields:
            fields = sorted(search.fields)
            for field in fields:
                self._check_field(field, "search")
            clauses.append(
                "(" + " OR ".join(f"CAST({field} AS TEXT) LIKE ? ESCAPE '\\'" for field in fields) + ")"
            )
            params.extend([f"%{escape_like(search.query)}%"] * len(fields))

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    def _special_clauses(self, filters: Dict[str, Any]) -> Clauses:
        """Entity-specific filters that are not plain column comparisons."""
        return [], []

    def _order_by(self, sort: Sequence[SortKey]) -> str:
        keys = tuple(sort) or self.default_sort or (SortKey(self.primary_key),)
        parts = []
        for key in keys:
            self._check_field(key.field, "sort")
            parts.append(f"{key.field} {'DESC' if key.descending else 'ASC'}")
        return " ORDER BY " + ", ".join(parts)

    def _check_field(self, field: str, usage: str) -> None:
        if field != self.primary_key and field not in self.columns:
            raise ValidationError(f"Cannot {usage} {self._table} by unknown field '{field}'", field=field)

    @staticmethod
    def _to_param(value: Any) -> Any:
        if isinstance(value, bool):
            return 1 if value else 0
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    # ------------------------------------------------------------------ #
    # input cleaning
    # ------------------------------------------------------------------ #

    def _clean(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Coerce raw (often string) form input to column types. Blank means NULL."""
        doc: Dict[str, Any] = {}
        for key, value in data.items():
            column = self.columns.get(key)
            if column is None:
                raise ValidationError(f"Unknown field '{key}'", field=key)
            if value is None or (isinstance(value, str) and not value.strip()):
                doc[key] = 0 if column.kind is bool else None
                continue
            try:
                doc[key] = self._convert(column, value)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"{column.title(key)} must be a valid {column.kind.__name__}", field=key
                ) from None
            self._check_constraints(key, column, doc[key])
        return doc

    @staticmethod
    def _convert(column: Column, value: Any) -> Any:
        if column.kind is bool:
            return 1 if parse_bool(value) else 0
        if column.kind is datetime:
            parsed = parse_date(value)
            if parsed is None:
                raise ValueError(value)
            return parsed.isoformat()
        if column.kind is int and isinstance(value, float) and not value.is_integer():
            raise ValueError(value)
        if column.kind is str:
            return str(value).strip()
        return column.kind(value)

    @staticmethod
    def _check_constraints(key: str, column: Column, value: Any) -> None:
        title = column.title(key)
        if column.max_length is not None and len(str(value)) > column.max_length:
            raise ValidationError(
                f"{title} must be {column.max_length} characters or less", field=key
            )
        if column.pattern is not None and not re.fullmatch(column.pattern, str(value)):
            raise ValidationError(f"{title} has an invalid format", field=key)
        if column.minimum is not None and value < column.minimum:
            raise ValidationError(f"{title} cannot be less than {column.minimum:g}", field=key)
        if column.maximum is not None and value > column.maximum:
            raise ValidationError(f"{title} cannot be more than {column.maximum:g}", field=key)

    def _check_required(self, doc: Dict[str, Any], *, creating: bool) -> None:
        for key, column in self.columns.items():
            if not column.required:
                continue
            if (creating or key in doc) and doc.get(key) is None:
                raise ValidationError(f"{column.title(key)} is required", field=key)

    def _validate(self, doc: Dict[str, Any], current: Optional[Dict[str, Any]] = None) -> None:
        """Cross-field rules; `current` is the stored row when updating. Entity repositories override."""
        pass
