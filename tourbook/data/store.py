"""Data store contract.

The booking services never talk to PocketBase directly. They go through a
DataStore: table-scoped insert / upsert / select / get / update, plus an
all-or-nothing batch for multi-row writes. Records cross this boundary as
plain dicts keyed by collection field names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol

PRODUCTS = "products"
REQUESTS = "requests"
REQUEST_LOGS = "request_logs"


def format_timestamp(moment: datetime) -> str:
    """Render a datetime the way PocketBase stores it: `2026-01-06 14:05:52.123Z`.

    Lexicographic order of these strings equals chronological order, which
    the range filters rely on.
    """
    moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%d %H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Condition:
    """A single filter predicate.

    `fields` holds one name for every operator except `ilike_any`, which
    matches when any of the fields contains the value (case-insensitive).
    """

    fields: tuple[str, ...]
    op: str
    value: Any

    @property
    def field(self) -> str:
        return self.fields[0]


@dataclass
class Query:
    """Filter, ordering, limit and relation expansion for a select.

    Builder methods return the query itself so calls chain:

        Query().eq("user_phone", phone).order("created_at", descending=True)
    """

    conditions: list[Condition] = field(default_factory=list)
    order_by: str | None = None
    descending: bool = False
    limit: int | None = None
    # Relation fields whose target records come back embedded under "expand"
    expand: list[str] = field(default_factory=list)

    def _add(self, fields: tuple[str, ...], op: str, value: Any) -> Query:
        self.conditions.append(Condition(fields, op, value))
        return self

    def eq(self, name: str, value: Any) -> Query:
        return self._add((name,), "=", value)

    def neq(self, name: str, value: Any) -> Query:
        return self._add((name,), "!=", value)

    def gte(self, name: str, value: Any) -> Query:
        return self._add((name,), ">=", value)

    def lte(self, name: str, value: Any) -> Query:
        return self._add((name,), "<=", value)

    def in_(self, name: str, values: list[Any] | tuple[Any, ...] | set[Any]) -> Query:
        return self._add((name,), "in", tuple(values))

    def ilike_any(self, names: list[str] | tuple[str, ...], term: str) -> Query:
        return self._add(tuple(names), "ilike_any", term)

    def order(self, name: str, descending: bool = False) -> Query:
        self.order_by = name
        self.descending = descending
        return self

    def take(self, limit: int) -> Query:
        self.limit = limit
        return self

    def include(self, *relations: str) -> Query:
        self.expand.extend(relations)
        return self


@dataclass(frozen=True)
class WriteOp:
    """One write inside a batch.

    action is "create", "update" or "upsert". `expect` maps field names to the
    values the stored record must still hold when the batch is committed.
    """

    action: str
    table: str
    data: dict[str, Any]
    record_id: str | None = None
    expect: dict[str, Any] | None = None

    @classmethod
    def create(cls, table: str, data: dict[str, Any]) -> WriteOp:
        return cls("create", table, data)

    @classmethod
    def update(cls, table: str, record_id: str, data: dict[str, Any], expect: dict[str, Any] | None = None) -> WriteOp:
        return cls("update", table, data, record_id=record_id, expect=expect)

    @classmethod
    def upsert(cls, table: str, data: dict[str, Any]) -> WriteOp:
        return cls("upsert", table, data, record_id=data.get("id"))


class ExpectationFailed(Exception):
    """A batch write's `expect` no longer matches the stored record."""

    def __init__(self, table: str, record_id: str, name: str, expected: Any, actual: Any):
        self.table = table
        self.record_id = record_id
        self.field = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"{table}/{record_id}: expected {name}={expected!r}, found {actual!r}")


class DataStore(Protocol):
    """Table-scoped CRUD and filtered queries over a remote store."""

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert one record and return it as stored"""
        ...

    def upsert(self, table: str, data: dict[str, Any], key: str = "id") -> dict[str, Any]:
        """Insert or replace the record identified by `key`"""
        ...

    def select(self, table: str, query: Query | None = None) -> list[dict[str, Any]]:
        """Return every record matching the query"""
        ...

    def get(self, table: str, record_id: str, expand: list[str] | None = None) -> dict[str, Any] | None:
        """Return one record by id, or None. `expand` works as in Query.include"""
        ...

    def update(self, table: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Patch one record and return it as stored"""
        ...

    def batch(self, ops: list[WriteOp]) -> list[dict[str, Any]]:
        """Apply all writes or none; returns stored records in op order"""
        ...
