"""Booking request status transition table.

    new              -> inquiring, rejected
    inquiring        -> pending_payment, rejected
    pending_payment  -> paid, cancelled
    paid             -> confirmed, cancelled
    confirmed        -> cancelled
    rejected, cancelled are terminal
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .errors import InvalidTransitionError
from .models import RequestStatus

INITIAL_STATUS = RequestStatus.NEW

TRANSITIONS: Mapping[RequestStatus, frozenset[RequestStatus]] = MappingProxyType(
    {
        RequestStatus.NEW: frozenset({RequestStatus.INQUIRING, RequestStatus.REJECTED}),
        RequestStatus.INQUIRING: frozenset({RequestStatus.PENDING_PAYMENT, RequestStatus.REJECTED}),
        RequestStatus.PENDING_PAYMENT: frozenset({RequestStatus.PAID, RequestStatus.CANCELLED}),
        RequestStatus.PAID: frozenset({RequestStatus.CONFIRMED, RequestStatus.CANCELLED}),
        RequestStatus.CONFIRMED: frozenset({RequestStatus.CANCELLED}),
        RequestStatus.REJECTED: frozenset(),
        RequestStatus.CANCELLED: frozenset(),
    }
)

TERMINAL_STATUSES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def allowed_transitions(current: RequestStatus) -> frozenset[RequestStatus]:
    """Statuses reachable from `current` in one step."""
    return TRANSITIONS[current]


def can_transition(current: RequestStatus, target: RequestStatus) -> bool:
    return target in TRANSITIONS[current]


def is_terminal(status: RequestStatus) -> bool:
    return status in TERMINAL_STATUSES


def validate_transition(current: RequestStatus, target: RequestStatus) -> None:
    """Raise InvalidTransitionError unless current -> target is in the table."""
    if not can_transition(current, target):
        raise InvalidTransitionError(current.value, target.value)
