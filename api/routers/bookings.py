"""
Bookings Router - Booking request lifecycle endpoints.

Customer-facing: create a request, look requests up by phone, cancel.
Admin-facing: list and filter, month calendar, status transitions, memos and
the audit log.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Query

from tourbook.errors import BookingError
from tourbook.models import RequestStatus
from tourbook.services import BookingRequestData

from ..dependencies import get_booking_service
from ..schemas.bookings import (
    BookingListResponse,
    BookingRequestCreate,
    BookingRequestResponse,
    CalendarMonthResponse,
    CancelRequest,
    MemoCreate,
    RequestLogResponse,
    StatusTransitionRequest,
)
from ..utils.http_errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bookings"])


@router.post("/bookings", response_model=BookingRequestResponse, status_code=201)
async def create_booking(body: BookingRequestCreate) -> BookingRequestResponse:
    """Create a booking request priced from the product's adult/child prices."""
    service = get_booking_service()
    data = BookingRequestData(
        product_id=body.product_id,
        user_name=body.user_name,
        user_phone=body.user_phone,
        user_email=body.user_email,
        user_kakao_id=body.user_kakao_id,
        date=body.date.isoformat(),
        adult_count=body.adult_count,
        child_count=body.child_count,
        special_requests=body.special_requests,
        pickup_location=body.pickup_location,
    )
    try:
        created = await asyncio.to_thread(service.create_booking_request, data)
    except BookingError as e:
        raise to_http_exception(e) from e
    return BookingRequestResponse.from_domain(created)


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(
    phone: str | None = Query(None, description="Customer phone number"),
    status: str | None = Query(None, description="Only requests in this status"),
) -> BookingListResponse:
    """List requests for a customer phone, or the admin listing with per-status counts."""
    service = get_booking_service()

    status_filter: RequestStatus | None = None
    if status is not None:
        try:
            status_filter = RequestStatus(status)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=f"invalid status: {status}") from e

    try:
        if phone:
            requests = await asyncio.to_thread(service.get_bookings_by_phone, phone)
            if status_filter is not None:
                requests = [r for r in requests if r.status == status_filter]
            counts = {"total": len(requests)}
        else:
            requests = await asyncio.to_thread(service.list_booking_requests, status_filter)
            counts = await asyncio.to_thread(service.count_by_status)
    except BookingError as e:
        raise to_http_exception(e) from e

    return BookingListResponse(
        requests=[BookingRequestResponse.from_domain(r) for r in requests],
        counts=counts,
    )


@router.get("/bookings/calendar", response_model=CalendarMonthResponse)
async def get_calendar(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
) -> CalendarMonthResponse:
    """Requests whose tour date falls in the given month."""
    service = get_booking_service()
    try:
        calendar_month = await asyncio.to_thread(service.get_calendar_month, year, month)
    except BookingError as e:
        raise to_http_exception(e) from e

    return CalendarMonthResponse(
        year=calendar_month.year,
        month=calendar_month.month,
        requests=[BookingRequestResponse.from_domain(r) for r in calendar_month.requests],
        stats=calendar_month.stats,
    )


@router.get("/bookings/{request_id}", response_model=BookingRequestResponse)
async def get_booking(request_id: str) -> BookingRequestResponse:
    service = get_booking_service()
    try:
        request = await asyncio.to_thread(service.get_booking_request, request_id)
    except BookingError as e:
        raise to_http_exception(e) from e
    return BookingRequestResponse.from_domain(request)


@router.post("/bookings/{request_id}/status", response_model=BookingRequestResponse)
async def transition_booking_status(request_id: str, body: StatusTransitionRequest) -> BookingRequestResponse:
    """Move a request to a new status; 409 when the transition table forbids it."""
    service = get_booking_service()
    try:
        updated = await asyncio.to_thread(
            service.transition_status, request_id, RequestStatus(body.status), body.note
        )
    except BookingError as e:
        raise to_http_exception(e) from e
    return BookingRequestResponse.from_domain(updated)


@router.post("/bookings/{request_id}/cancel", response_model=BookingRequestResponse)
async def cancel_booking(request_id: str, body: CancelRequest | None = None) -> BookingRequestResponse:
    service = get_booking_service()
    reason = body.reason if body else None
    try:
        cancelled = await asyncio.to_thread(service.cancel_booking_request, request_id, reason)
    except BookingError as e:
        raise to_http_exception(e) from e
    return BookingRequestResponse.from_domain(cancelled)


@router.get("/bookings/{request_id}/logs", response_model=list[RequestLogResponse])
async def get_booking_logs(request_id: str) -> list[RequestLogResponse]:
    """Audit log for a request, newest first."""
    service = get_booking_service()
    try:
        logs = await asyncio.to_thread(service.get_request_logs, request_id)
    except BookingError as e:
        raise to_http_exception(e) from e
    return [RequestLogResponse.from_domain(log) for log in logs]


@router.post("/bookings/{request_id}/memos", response_model=RequestLogResponse, status_code=201)
async def add_booking_memo(request_id: str, body: MemoCreate) -> RequestLogResponse:
    service = get_booking_service()
    try:
        log = await asyncio.to_thread(service.add_memo, request_id, body.notes, body.user_id)
    except BookingError as e:
        raise to_http_exception(e) from e
    return RequestLogResponse.from_domain(log)
