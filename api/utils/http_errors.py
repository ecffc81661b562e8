"""Map booking errors onto HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException

from tourbook.errors import (
    BookingError,
    InvalidArgumentError,
    InvalidTransitionError,
    NotFoundError,
    UpstreamFailureError,
)


def to_http_exception(exc: BookingError) -> HTTPException:
    """HTTPException for a BookingError: 404, 409, 422 or 502."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidTransitionError):
        return HTTPException(
            status_code=409,
            detail={"message": str(exc), "current_status": exc.current, "attempted_status": exc.attempted},
        )
    if isinstance(exc, InvalidArgumentError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, UpstreamFailureError):
        return HTTPException(status_code=502, detail="Booking data service unavailable")
    return HTTPException(status_code=500, detail=str(exc))
