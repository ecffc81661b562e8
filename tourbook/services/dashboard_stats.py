"""Dashboard statistics over booking requests.

`compute_dashboard_stats` is a pure reduction over request records, so the
numbers can be re-derived from the stored requests at any time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import Any

from ..data.repositories import RequestRepository
from ..data.store import DataStore, format_timestamp, utc_now
from ..errors import InvalidArgumentError
from ..models import DashboardStats, RequestStatus

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30

REVENUE_STATUSES = frozenset({RequestStatus.PAID.value, RequestStatus.CONFIRMED.value})


def _status_value(record: dict[str, Any]) -> str:
    status = record.get("status")
    return status.value if isinstance(status, RequestStatus) else str(status or "")


def compute_dashboard_stats(records: Iterable[dict[str, Any]]) -> DashboardStats:
    """Reduce request records to dashboard counts and revenue.

    Revenue counts `paid` and `confirmed` requests; the average divides it by
    the confirmed count only, and is 0 when nothing is confirmed.
    """
    stats = DashboardStats()

    for record in records:
        status = _status_value(record)
        stats.total_requests += 1
        if status == RequestStatus.NEW.value:
            stats.new_requests += 1
        elif status == RequestStatus.CONFIRMED.value:
            stats.confirmed_requests += 1
        elif status == RequestStatus.CANCELLED.value:
            stats.cancelled_requests += 1

        if status in REVENUE_STATUSES:
            stats.total_revenue += int(record.get("total_amount") or 0)

    if stats.confirmed_requests > 0:
        stats.average_booking_value = stats.total_revenue / stats.confirmed_requests

    return stats


class DashboardService:
    """Fetches the lookback window and reduces it with compute_dashboard_stats."""

    def __init__(self, store: DataStore, clock: Callable[[], datetime] = utc_now) -> None:
        self.requests = RequestRepository(store)
        self.clock = clock

    def get_dashboard_stats(self, shop_id: str | None = None, days: int = DEFAULT_WINDOW_DAYS) -> DashboardStats:
        if days < 0:
            raise InvalidArgumentError(f"days must not be negative, got {days}")

        since = format_timestamp(self.clock() - timedelta(days=days))
        records = self.requests.fetch_created_since(since, shop_id=shop_id)
        stats = compute_dashboard_stats(records)

        logger.debug(
            f"Dashboard stats since {since} (shop={shop_id or 'all'}): "
            f"{stats.total_requests} requests, revenue {stats.total_revenue}"
        )
        return stats
