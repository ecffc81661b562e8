"""
Shared dependencies for the Tourbook API.

This module provides:
- PocketBase client management (global instance, authenticated on startup)
- The DataStore and service instances the routers use
"""

from __future__ import annotations

import asyncio
import logging

from pocketbase import PocketBase

from tourbook.data.pocketbase_store import PocketBaseStore
from tourbook.services import BookingService, DashboardService, ProductService

from .settings import get_settings

logger = logging.getLogger(__name__)

# ========================================
# PocketBase Client
# ========================================

# The API authenticates once as superuser and shares one client; the
# PocketBase HTTP API itself is stateless.
_settings = get_settings()
pb_url = _settings.pocketbase_url
pb = PocketBase(pb_url)
store = PocketBaseStore(pb)


async def authenticate_pb() -> None:
    """Authenticate with PocketBase as superuser."""
    settings = get_settings()
    try:
        await asyncio.to_thread(
            pb.collection("_superusers").auth_with_password,
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise


# ========================================
# Services (patched in router tests)
# ========================================


def get_booking_service() -> BookingService:
    return BookingService(store, currency=get_settings().currency)


def get_dashboard_service() -> DashboardService:
    return DashboardService(store)


def get_product_service() -> ProductService:
    return ProductService(store)


__all__ = [
    "pb",
    "pb_url",
    "store",
    "authenticate_pb",
    "get_booking_service",
    "get_dashboard_service",
    "get_product_service",
]
