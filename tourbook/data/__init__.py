"""Data access layer: the DataStore contract and its PocketBase implementation."""

from __future__ import annotations

from .pocketbase_store import PocketBaseStore
from .store import (
    PRODUCTS,
    REQUEST_LOGS,
    REQUESTS,
    DataStore,
    ExpectationFailed,
    Query,
    WriteOp,
    format_timestamp,
)

__all__ = [
    "PRODUCTS",
    "REQUESTS",
    "REQUEST_LOGS",
    "DataStore",
    "ExpectationFailed",
    "PocketBaseStore",
    "Query",
    "WriteOp",
    "format_timestamp",
]
