#!/usr/bin/env python3
"""
Tourbook API - HTTP API layer for the tour booking backend.

This is the FastAPI application that serves the booking pages and the admin
console. It exposes:
- Booking request lifecycle (create, transition, cancel, audit log)
- Admin listing, calendar and dashboard statistics
- Product catalog
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tourbook.logging_config import configure_logging, get_logger

from .dependencies import authenticate_pb
from .settings import get_settings

# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()

    if not settings.skip_pb_auth:
        await authenticate_pb()
    else:
        logger.warning("Skipping PocketBase authentication (SKIP_PB_AUTH=true)")

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Tourbook API", description="Tour booking request API", lifespan=lifespan)

    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    from .routers import bookings, dashboard, products

    app.include_router(bookings.router)
    app.include_router(dashboard.router)
    app.include_router(products.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "tourbook-api"}

    return app


# Create app instance for uvicorn
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=8000)
