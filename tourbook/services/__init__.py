"""Booking, dashboard and catalog services."""

from __future__ import annotations

from .booking_service import BookingRequestData, BookingService, CalendarMonth
from .dashboard_stats import DashboardService, compute_dashboard_stats
from .product_service import ProductService

__all__ = [
    "BookingRequestData",
    "BookingService",
    "CalendarMonth",
    "DashboardService",
    "ProductService",
    "compute_dashboard_stats",
]
