"""
Dashboard Router - Booking statistics for the admin dashboard.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Query

from tourbook.errors import BookingError

from ..dependencies import get_dashboard_service
from ..schemas.dashboard import DashboardStatsResponse
from ..settings import get_settings
from ..utils.http_errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    shop_id: str | None = Query(None, description="Only requests for this shop's products"),
    days: int | None = Query(None, ge=0, description="Lookback window in days"),
) -> DashboardStatsResponse:
    """Counts and revenue over requests created in the last `days` days."""
    window = days if days is not None else get_settings().dashboard_default_days
    service = get_dashboard_service()
    try:
        stats = await asyncio.to_thread(service.get_dashboard_stats, shop_id, window)
    except BookingError as e:
        raise to_http_exception(e) from e

    return DashboardStatsResponse(**stats.to_dict(), days=window, shop_id=shop_id)
