"""Booking error classes.

Every failure the booking services raise derives from BookingError. None of
them are retried or recovered here; callers decide what to show the user.
"""

from __future__ import annotations


class BookingError(Exception):
    """Base exception for booking errors."""

    pass


class NotFoundError(BookingError):
    """Raised when a referenced product or request does not exist."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} record '{record_id}' not found")


class InvalidTransitionError(BookingError):
    """Raised when a status change is not in the transition table."""

    def __init__(self, current: str, attempted: str, message: str | None = None):
        self.current = current
        self.attempted = attempted
        super().__init__(message or f"Invalid status transition from {current} to {attempted}")


class StaleStatusError(InvalidTransitionError):
    """Raised when a request's status changed between read and commit."""

    def __init__(self, expected: str, actual: str, attempted: str):
        self.expected = expected
        super().__init__(
            actual,
            attempted,
            f"Request status changed from {expected} to {actual} before transition to {attempted} was committed",
        )


class InvalidArgumentError(BookingError):
    """Raised when booking input fails validation."""

    pass


class UpstreamFailureError(BookingError):
    """Raised when a data store operation itself fails."""

    def __init__(self, operation: str, table: str, detail: str = "", status: int | None = None):
        self.operation = operation
        self.table = table
        self.status = status
        message = f"{operation} on {table} failed"
        if status is not None:
            message += f" (status {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
