"""Request repository for data access.

Handles all store operations on the `requests` collection."""

from __future__ import annotations

import logging
from typing import Any

from ...models import BookingRequest, RequestStatus
from ..store import REQUESTS, DataStore, Query, WriteOp

logger = logging.getLogger(__name__)

# Written by the store on insert, never sent by us
_STORE_ASSIGNED = ("id", "created_at", "updated_at")

# Customer-facing reads carry the product summary shown next to the booking
_PRODUCT = "product_id"


class RequestRepository:
    """Repository for BookingRequest data access"""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    def get(self, request_id: str) -> BookingRequest | None:
        record = self.store.get(REQUESTS, request_id, expand=[_PRODUCT])
        return BookingRequest.from_record(record) if record else None

    def create(self, request: BookingRequest) -> BookingRequest:
        """Insert a new request and return it with its assigned id and timestamps"""
        data = {k: v for k, v in request.to_record().items() if k not in _STORE_ASSIGNED}
        record = self.store.insert(REQUESTS, data)
        logger.debug(f"Created booking request {record.get('id')} for product {request.product_id}")
        return BookingRequest.from_record(record)

    def list_by_phone(self, phone: str) -> list[BookingRequest]:
        """All requests made with a phone number, newest first"""
        query = Query().eq("user_phone", phone).order("created_at", descending=True).include(_PRODUCT)
        return [BookingRequest.from_record(r) for r in self.store.select(REQUESTS, query)]

    def list(self, status: RequestStatus | None = None) -> list[BookingRequest]:
        """Admin listing, optionally narrowed to one status, newest first"""
        query = Query()
        if status is not None:
            query.eq("status", status.value)
        query.order("created_at", descending=True)
        return [BookingRequest.from_record(r) for r in self.store.select(REQUESTS, query)]

    def list_by_tour_date(self, start: str, end: str) -> list[BookingRequest]:
        """Requests whose tour date falls in [start, end], earliest date first.

        Args:
            start: First date, YYYY-MM-DD
            end: Last date, YYYY-MM-DD
        """
        query = Query().gte("date", start).lte("date", end).order("date")
        return [BookingRequest.from_record(r) for r in self.store.select(REQUESTS, query)]

    def fetch_created_since(self, since: str, shop_id: str | None = None) -> list[dict[str, Any]]:
        """Raw records created at or after `since`, optionally for one shop's products."""
        query = Query()
        if shop_id:
            # Relation traversal through requests.product_id -> products.shop_id
            query.eq("product_id.shop_id", shop_id)
        query.gte("created_at", since)
        return self.store.select(REQUESTS, query)

    def fetch_statuses(self) -> list[str]:
        return [r.get("status", "") for r in self.store.select(REQUESTS)]

    def status_update_op(
        self,
        request_id: str,
        status: RequestStatus,
        updated_at: str,
        expected_status: RequestStatus | None = None,
    ) -> WriteOp:
        """Batch write moving a request to `status`, guarded on its previous status."""
        expect = {"status": expected_status.value} if expected_status else None
        return WriteOp.update(REQUESTS, request_id, {"status": status.value, "updated_at": updated_at}, expect=expect)
