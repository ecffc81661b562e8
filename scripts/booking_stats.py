#!/usr/bin/env python3
"""Show booking request statistics straight from PocketBase.

Prints the dashboard numbers for a lookback window and the per-status counts
over every stored request. Credentials come from the environment or .env
(POCKETBASE_URL, POCKETBASE_ADMIN_EMAIL, POCKETBASE_ADMIN_PASSWORD).

    python scripts/booking_stats.py --days 7 --shop shop_kabira
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable
from datetime import datetime
from typing import Any

from dotenv import load_dotenv

from tourbook.data.connection_manager import ConnectionManager
from tourbook.data.store import DataStore, utc_now
from tourbook.errors import BookingError
from tourbook.logging_config import configure_logging, get_logger
from tourbook.services import BookingService, DashboardService
from tourbook.services.dashboard_stats import DEFAULT_WINDOW_DAYS

logger = get_logger(__name__)


def collect_stats(
    store: DataStore,
    days: int,
    shop_id: str | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> dict[str, Any]:
    """Dashboard numbers for the window plus all-time status counts."""
    dashboard = DashboardService(store, clock=clock).get_dashboard_stats(shop_id=shop_id, days=days)
    counts = BookingService(store).count_by_status()
    return {"days": days, "shop_id": shop_id, "dashboard": dashboard.to_dict(), "status_counts": counts}


def render(stats: dict[str, Any]) -> str:
    dashboard = stats["dashboard"]
    scope = stats["shop_id"] or "all shops"
    lines = [
        "=" * 60,
        f"LAST {stats['days']} DAYS ({scope})",
        "=" * 60,
        f"  {'requests':20} {dashboard['total_requests']:>10}",
        f"  {'new':20} {dashboard['new_requests']:>10}",
        f"  {'confirmed':20} {dashboard['confirmed_requests']:>10}",
        f"  {'cancelled':20} {dashboard['cancelled_requests']:>10}",
        f"  {'revenue (KRW)':20} {dashboard['total_revenue']:>10,}",
        f"  {'average (KRW)':20} {dashboard['average_booking_value']:>10,.0f}",
        "",
        "=" * 60,
        "ALL REQUESTS BY STATUS",
        "=" * 60,
    ]
    counts = stats["status_counts"]
    for status, count in counts.items():
        if status != "total":
            lines.append(f"  {status:20} {count:>10}")
    lines.append(f"  {'TOTAL':20} {counts['total']:>10}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show booking request statistics")
    parser.add_argument("--days", type=int, default=DEFAULT_WINDOW_DAYS, help="Lookback window in days")
    parser.add_argument("--shop", dest="shop_id", help="Only requests for this shop's products")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    load_dotenv()
    configure_logging(source="stats", debug=args.debug)

    try:
        store = ConnectionManager.get_instance().get_store()
        stats = collect_stats(store, args.days, args.shop_id)
    except BookingError as e:
        logger.error(f"Could not collect booking stats: {e}")
        return 1

    print(json.dumps(stats, ensure_ascii=False, indent=2) if args.json else render(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())
