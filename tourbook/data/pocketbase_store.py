"""PocketBase-backed DataStore.

Translates Query objects into PocketBase filter expressions, converts SDK
Record objects into plain dicts, and submits batches through PocketBase's
transactional `/api/batch` endpoint (PocketBase 0.23+).

Every SDK failure is logged here and re-raised as UpstreamFailureError.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from pocketbase import PocketBase
from pocketbase.utils import ClientResponseError

from ..errors import UpstreamFailureError
from ..logging_config import get_logger
from .store import Condition, ExpectationFailed, Query, WriteOp

logger = get_logger(__name__)

T = TypeVar("T")

# Attributes the SDK puts on every Record that are not collection fields
_RECORD_META = {"collection_id", "collection_name", "expand"}


def record_to_dict(record: Any) -> dict[str, Any]:
    """Convert a PocketBase SDK Record (or an already-plain dict) into a dict.

    Expanded relations are converted too and kept under "expand", keyed by
    relation field name. Records fetched without expansion carry no "expand" key.
    """
    if isinstance(record, dict):
        return dict(record)
    data = {key: value for key, value in vars(record).items() if not key.startswith("_") and key not in _RECORD_META}
    expanded = getattr(record, "expand", None)
    if expanded:
        data["expand"] = {
            name: [record_to_dict(r) for r in related] if isinstance(related, list) else record_to_dict(related)
            for name, related in expanded.items()
        }
    return data


def _literal(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return json.dumps(str(value), ensure_ascii=False)


def _compile_condition(condition: Condition) -> str:
    if condition.op in ("=", "!=", ">=", "<="):
        return f"{condition.field} {condition.op} {_literal(condition.value)}"
    if condition.op == "in":
        parts = [f"{condition.field} = {_literal(v)}" for v in condition.value]
        return "(" + " || ".join(parts) + ")"
    if condition.op == "ilike_any":
        term = _literal(condition.value)
        parts = [f"{name} ~ {term}" for name in condition.fields]
        return "(" + " || ".join(parts) + ")"
    raise ValueError(f"Unsupported filter operator: {condition.op}")


def compile_filter(query: Query) -> str:
    """Build a PocketBase filter expression from a Query."""
    return " && ".join(_compile_condition(c) for c in query.conditions)


def compile_sort(query: Query) -> str | None:
    if not query.order_by:
        return None
    return f"-{query.order_by}" if query.descending else query.order_by


class PocketBaseStore:
    """DataStore implementation over the PocketBase Python SDK.

    Usage:
        pb = PocketBase("http://127.0.0.1:8090")
        pb.collection("_superusers").auth_with_password(email, password)
        store = PocketBaseStore(pb)

        rows = store.select("requests", Query().eq("user_phone", "010-1234-5678"))
    """

    # Page size for get_full_list pagination
    PAGE_SIZE = 200

    def __init__(self, pb: PocketBase) -> None:
        self.pb = pb

    def _call(self, operation: str, table: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except ClientResponseError as e:
            logger.error(f"PocketBase {operation} on {table} failed: status={e.status} data={e.data}")
            raise UpstreamFailureError(operation, table, str(e.data or e), status=e.status) from e

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        logger.trace(f"insert {table}: {data}")  # type: ignore[attr-defined]
        record = self._call("insert", table, lambda: self.pb.collection(table).create(data))
        return record_to_dict(record)

    def update(self, table: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        logger.trace(f"update {table}/{record_id}: {data}")  # type: ignore[attr-defined]
        record = self._call("update", table, lambda: self.pb.collection(table).update(record_id, data))
        return record_to_dict(record)

    def get(self, table: str, record_id: str, expand: list[str] | None = None) -> dict[str, Any] | None:
        collection = self.pb.collection(table)
        try:
            if expand:
                record = collection.get_one(record_id, {"expand": ",".join(expand)})
            else:
                record = collection.get_one(record_id)
        except ClientResponseError as e:
            if e.status == 404:
                return None
            logger.error(f"PocketBase get on {table}/{record_id} failed: status={e.status} data={e.data}")
            raise UpstreamFailureError("get", table, str(e.data or e), status=e.status) from e
        return record_to_dict(record)

    def select(self, table: str, query: Query | None = None) -> list[dict[str, Any]]:
        query = query or Query()

        # An empty set-membership predicate can never match
        if any(c.op == "in" and not c.value for c in query.conditions):
            return []

        params: dict[str, Any] = {}
        filter_str = compile_filter(query)
        if filter_str:
            params["filter"] = filter_str
        sort = compile_sort(query)
        if sort:
            params["sort"] = sort
        if query.expand:
            params["expand"] = ",".join(query.expand)

        logger.trace(f"select {table}: {params} limit={query.limit}")  # type: ignore[attr-defined]

        collection = self.pb.collection(table)
        if query.limit:
            result = self._call("select", table, lambda: collection.get_list(1, query.limit, params))
            records = result.items
        else:
            records = self._call(
                "select",
                table,
                lambda: collection.get_full_list(batch=self.PAGE_SIZE, query_params=params),
            )
        return [record_to_dict(r) for r in records]

    def upsert(self, table: str, data: dict[str, Any], key: str = "id") -> dict[str, Any]:
        key_value = data.get(key)
        existing: dict[str, Any] | None = None
        if key_value:
            if key == "id":
                existing = self.get(table, key_value)
            else:
                matches = self.select(table, Query().eq(key, key_value).take(1))
                existing = matches[0] if matches else None

        if existing is None:
            return self.insert(table, data)

        patch = {k: v for k, v in data.items() if k != "id"}
        return self.update(table, existing["id"], patch)

    def _check_expectations(self, ops: list[WriteOp]) -> None:
        for op in ops:
            if not op.expect or not op.record_id:
                continue
            current = self.get(op.table, op.record_id) or {}
            for name, expected in op.expect.items():
                if current.get(name) != expected:
                    raise ExpectationFailed(op.table, op.record_id, name, expected, current.get(name))

    @staticmethod
    def _batch_request(op: WriteOp) -> dict[str, Any]:
        base = f"/api/collections/{op.table}/records"
        if op.action == "create":
            return {"method": "POST", "url": base, "body": op.data}
        if op.action == "update":
            return {"method": "PATCH", "url": f"{base}/{op.record_id}", "body": op.data}
        if op.action == "upsert":
            return {"method": "PUT", "url": base, "body": op.data}
        raise ValueError(f"Unsupported batch action: {op.action}")

    def batch(self, ops: list[WriteOp]) -> list[dict[str, Any]]:
        """Submit writes as one PocketBase transaction.

        `expect` guards are re-read just before submitting. PocketBase has no
        conditional update, so a concurrent writer can still slip in between
        the check and the commit.
        """
        if not ops:
            return []

        self._check_expectations(ops)

        body = {"requests": [self._batch_request(op) for op in ops]}
        tables = ",".join(sorted({op.table for op in ops}))
        logger.trace(f"batch {tables}: {body}")  # type: ignore[attr-defined]

        response = self._call("batch", tables, lambda: self.pb.send("/api/batch", {"method": "POST", "body": body}))
        return [dict(item.get("body") or {}) for item in response or []]
