"""Booking lifecycle service.

Creates booking requests, moves them through the status transition table
and keeps the request_logs audit trail in step with every status change.
"""

from __future__ import annotations

import logging
from calendar import monthrange
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..data.repositories import ProductRepository, RequestLogRepository, RequestRepository
from ..data.store import PRODUCTS, REQUESTS, DataStore, ExpectationFailed, format_timestamp, utc_now
from ..errors import InvalidArgumentError, NotFoundError, StaleStatusError
from ..models import DEFAULT_CURRENCY, BookingRequest, LogAction, RequestLog, RequestStatus
from ..transitions import INITIAL_STATUS, validate_transition

logger = logging.getLogger(__name__)


@dataclass
class BookingRequestData:
    """Customer input for a new booking request"""

    product_id: str
    user_name: str
    user_phone: str
    date: str
    adult_count: int
    child_count: int = 0
    user_email: str | None = None
    user_kakao_id: str | None = None
    special_requests: str | None = None
    pickup_location: str | None = None


@dataclass
class CalendarMonth:
    """Requests scheduled in one month plus the headline counts shown above the calendar"""

    year: int
    month: int
    requests: list[BookingRequest] = field(default_factory=list)

    @property
    def stats(self) -> dict[str, int]:
        counts = Counter(r.status for r in self.requests)
        return {
            "total": len(self.requests),
            "new": counts[RequestStatus.NEW],
            "confirmed": counts[RequestStatus.CONFIRMED],
            "cancelled": counts[RequestStatus.CANCELLED],
        }


def validate_headcount(adult_count: int, child_count: int) -> None:
    """Reject headcounts that cannot be priced.

    Zero or negative adults and negative children fail before anything is written.
    """
    if adult_count < 1:
        raise InvalidArgumentError(f"adult_count must be at least 1, got {adult_count}")
    if child_count < 0:
        raise InvalidArgumentError(f"child_count must not be negative, got {child_count}")


class BookingService:
    """Owns the booking request lifecycle.

    Usage:
        service = BookingService(store)
        request = service.create_booking_request(BookingRequestData(...))
        service.transition_status(request.id, RequestStatus.INQUIRING, note="called shop")
    """

    def __init__(
        self,
        store: DataStore,
        clock: Callable[[], datetime] = utc_now,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.store = store
        self.clock = clock
        self.currency = currency
        self.products = ProductRepository(store)
        self.requests = RequestRepository(store)
        self.logs = RequestLogRepository(store)

    def _now(self) -> str:
        return format_timestamp(self.clock())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_booking_request(self, data: BookingRequestData) -> BookingRequest:
        """Price and insert a new request with status `new`.

        Raises:
            InvalidArgumentError: adult_count < 1 or child_count < 0
            NotFoundError: product_id does not reference a product
        """
        child_count = data.child_count or 0
        validate_headcount(data.adult_count, child_count)

        product = self.products.get(data.product_id)
        if product is None:
            raise NotFoundError(PRODUCTS, data.product_id)

        request = BookingRequest(
            product_id=data.product_id,
            user_name=data.user_name,
            user_phone=data.user_phone,
            user_email=data.user_email,
            user_kakao_id=data.user_kakao_id,
            date=data.date,
            adult_count=data.adult_count,
            child_count=child_count,
            special_requests=data.special_requests,
            pickup_location=data.pickup_location,
            total_amount=product.quote(data.adult_count, child_count),
            currency=self.currency,
            status=INITIAL_STATUS,
        )
        created = self.requests.create(request)
        logger.info(
            f"Booking request {created.id} created: product={data.product_id} "
            f"adults={data.adult_count} children={child_count} total={created.total_amount}"
        )
        return created

    def transition_status(self, request_id: str, status: RequestStatus, note: str | None = None) -> BookingRequest:
        """Move a request to `status` and append the matching status_change log row.

        The status update and the log row are committed in one batch, with the
        update guarded on the status read here.

        Raises:
            NotFoundError: no such request
            InvalidTransitionError: current -> status is not allowed
            StaleStatusError: the status changed before the batch committed
        """
        current = self.requests.get(request_id)
        if current is None:
            raise NotFoundError(REQUESTS, request_id)

        previous = current.status
        validate_transition(previous, status)

        log = RequestLog(
            request_id=request_id,
            action=LogAction.STATUS_CHANGE,
            previous_status=previous,
            new_status=status,
            notes=note,
        )
        ops = [
            self.requests.status_update_op(request_id, status, self._now(), expected_status=previous),
            self.logs.append_op(log),
        ]

        try:
            results = self.store.batch(ops)
        except ExpectationFailed as e:
            logger.warning(f"Stale transition on request {request_id}: {e}")
            raise StaleStatusError(previous.value, str(e.actual), status.value) from e

        logger.info(f"Request {request_id} status {previous.value} -> {status.value}")

        updated = results[0] if results else None
        if updated and updated.get("id"):
            return BookingRequest.from_record(updated)
        refreshed = self.requests.get(request_id)
        if refreshed is None:
            raise NotFoundError(REQUESTS, request_id)
        return refreshed

    def cancel_booking_request(self, request_id: str, reason: str | None = None) -> BookingRequest:
        """Transition to `cancelled`, recording `reason` as the log note."""
        return self.transition_status(request_id, RequestStatus.CANCELLED, reason)

    def add_memo(self, request_id: str, notes: str, user_id: str | None = None) -> RequestLog:
        """Append a staff memo to a request's log. Status is untouched."""
        if not notes or not notes.strip():
            raise InvalidArgumentError("memo notes must not be blank")
        if self.requests.get(request_id) is None:
            raise NotFoundError(REQUESTS, request_id)

        return self.logs.append(
            RequestLog(request_id=request_id, action=LogAction.ADMIN_MEMO, notes=notes.strip(), user_id=user_id)
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_booking_request(self, request_id: str) -> BookingRequest:
        request = self.requests.get(request_id)
        if request is None:
            raise NotFoundError(REQUESTS, request_id)
        return request

    def get_bookings_by_phone(self, phone: str) -> list[BookingRequest]:
        return self.requests.list_by_phone(phone)

    def get_request_logs(self, request_id: str) -> list[RequestLog]:
        return self.logs.list_for_request(request_id)

    def list_booking_requests(self, status: RequestStatus | None = None) -> list[BookingRequest]:
        return self.requests.list(status)

    def count_by_status(self) -> dict[str, Any]:
        """Counts over every stored request, for the admin list header."""
        counts = Counter(self.requests.fetch_statuses())
        summary: dict[str, Any] = {"total": sum(counts.values())}
        for status in RequestStatus:
            summary[status.value] = counts.get(status.value, 0)
        return summary

    def get_calendar_month(self, year: int, month: int) -> CalendarMonth:
        """Requests whose tour date falls in the given month."""
        if not 1 <= month <= 12:
            raise InvalidArgumentError(f"month must be 1-12, got {month}")
        last_day = monthrange(year, month)[1]
        start = f"{year:04d}-{month:02d}-01"
        end = f"{year:04d}-{month:02d}-{last_day:02d}"
        return CalendarMonth(year=year, month=month, requests=self.requests.list_by_tour_date(start, end))
