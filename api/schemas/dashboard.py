"""
Pydantic schemas for dashboard endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DashboardStatsResponse(BaseModel):
    """Aggregates over requests created inside the lookback window."""

    total_requests: int = Field(description="Requests created in the window")
    new_requests: int = Field(description="Requests still in status new")
    confirmed_requests: int = Field(description="Requests in status confirmed")
    cancelled_requests: int = Field(description="Requests in status cancelled")
    total_revenue: int = Field(description="Sum of total_amount over paid and confirmed requests (KRW)")
    average_booking_value: float = Field(description="total_revenue / confirmed_requests, 0 when none confirmed")
    days: int = Field(description="Lookback window in days")
    shop_id: str | None = Field(None, description="Shop the statistics are scoped to")
