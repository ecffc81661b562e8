"""
Pydantic schemas for the Tourbook API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .bookings import (
    BookingListResponse,
    BookingRequestCreate,
    BookingRequestResponse,
    CalendarMonthResponse,
    CancelRequest,
    MemoCreate,
    RequestLogResponse,
    StatusTransitionRequest,
)
from .dashboard import DashboardStatsResponse
from .products import ProductResponse, ProductUpsert

__all__ = [
    # Bookings
    "BookingListResponse",
    "BookingRequestCreate",
    "BookingRequestResponse",
    "CalendarMonthResponse",
    "CancelRequest",
    "MemoCreate",
    "RequestLogResponse",
    "StatusTransitionRequest",
    # Dashboard
    "DashboardStatsResponse",
    # Products
    "ProductResponse",
    "ProductUpsert",
]
