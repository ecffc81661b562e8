"""
Tourbook - Booking request lifecycle for tour products.

This package contains:
- models: Domain models (Product, BookingRequest, RequestLog)
- transitions: Booking status transition table
- data: DataStore contract and the PocketBase store
- services: Booking lifecycle, dashboard statistics and product catalog
"""

from tourbook.errors import (
    BookingError,
    InvalidArgumentError,
    InvalidTransitionError,
    NotFoundError,
    StaleStatusError,
    UpstreamFailureError,
)
from tourbook.models import BookingRequest, DashboardStats, Product, RequestLog, RequestStatus

__all__ = [
    "BookingError",
    "BookingRequest",
    "DashboardStats",
    "InvalidArgumentError",
    "InvalidTransitionError",
    "NotFoundError",
    "Product",
    "RequestLog",
    "RequestStatus",
    "StaleStatusError",
    "UpstreamFailureError",
]
