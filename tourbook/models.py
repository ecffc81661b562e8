"""Domain models for tour products, booking requests and their audit log.

Field names match the PocketBase collections (`products`, `requests`,
`request_logs`), so `from_record` / `to_record` are plain renames.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

DEFAULT_CURRENCY = "KRW"


class RequestStatus(Enum):
    """Lifecycle status of a booking request"""

    NEW = "new"
    INQUIRING = "inquiring"
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class LogAction(Enum):
    """Kinds of request_logs rows"""

    STATUS_CHANGE = "status_change"
    ADMIN_MEMO = "admin_memo"


class ProductCategory(Enum):
    DIVING = "diving"
    SNORKEL = "snorkel"
    SUP = "sup"
    KAYAK = "kayak"
    STARGAZING = "stargazing"
    GLASSBOAT = "glassboat"
    IRIOMOTE = "iriomote"
    OTHER = "other"


class Difficulty(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ALL = "all"


def _pick(record: dict[str, Any], names: list[str]) -> dict[str, Any]:
    return {name: record[name] for name in names if name in record}


@dataclass
class Product:
    """Priced catalog entry. Prices are whole KRW."""

    id: str
    title_ko: str
    title_ja: str
    category: str = ProductCategory.OTHER.value
    shop_id: str | None = None
    description_ko: str | None = None
    description_ja: str | None = None
    difficulty: str | None = None
    duration_minutes: int | None = None
    price_adult_krw: int | None = None
    price_child_krw: int | None = None
    images: list[str] = field(default_factory=list)
    is_active: bool = True
    is_popular: bool = False
    display_order: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Product:
        names = [f for f in cls.__dataclass_fields__]
        data = _pick(record, names)
        data["images"] = list(data.get("images") or [])
        # PocketBase number fields are never null; an unset child price reads back as 0
        if "price_child_krw" in data:
            data["price_child_krw"] = data["price_child_krw"] or None
        return cls(**data)

    def to_record(self) -> dict[str, Any]:
        return asdict(self)

    def quote(self, adult_count: int, child_count: int = 0) -> int:
        """Total price for a headcount; children pay the adult price when the child price is unset or 0."""
        adult_price = self.price_adult_krw or 0
        child_price = self.price_child_krw or adult_price
        return adult_price * adult_count + child_price * child_count


@dataclass
class BookingRequest:
    """A customer's request to reserve a tour product for a date and headcount"""

    product_id: str
    user_name: str
    user_phone: str
    date: str
    adult_count: int
    child_count: int = 0
    user_email: str | None = None
    user_kakao_id: str | None = None
    special_requests: str | None = None
    pickup_location: str | None = None
    total_amount: int = 0
    currency: str = DEFAULT_CURRENCY
    status: RequestStatus = RequestStatus.NEW
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    # Product the request points at, when the read expanded `product_id`
    product: Product | None = field(default=None, compare=False)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> BookingRequest:
        names = [f for f in cls.__dataclass_fields__ if f != "product"]
        data = _pick(record, names)
        related = (record.get("expand") or {}).get("product_id")
        if related:
            data["product"] = Product.from_record(related)
        data["status"] = RequestStatus(data.get("status", RequestStatus.NEW.value))
        data["child_count"] = data.get("child_count") or 0
        data["total_amount"] = int(data.get("total_amount") or 0)
        return cls(**data)

    def to_record(self) -> dict[str, Any]:
        """Collection fields only; the expanded product is never written back."""
        record = asdict(self)
        del record["product"]
        record["status"] = self.status.value
        return record


@dataclass
class RequestLog:
    """One append-only audit row for a booking request"""

    request_id: str
    action: LogAction
    previous_status: RequestStatus | None = None
    new_status: RequestStatus | None = None
    notes: str | None = None
    user_id: str | None = None
    id: str | None = None
    created_at: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> RequestLog:
        previous = record.get("previous_status")
        new = record.get("new_status")
        return cls(
            id=record.get("id"),
            request_id=record["request_id"],
            action=LogAction(record["action"]),
            previous_status=RequestStatus(previous) if previous else None,
            new_status=RequestStatus(new) if new else None,
            notes=record.get("notes") or None,
            user_id=record.get("user_id") or None,
            created_at=record.get("created_at"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "request_id": self.request_id,
            "action": self.action.value,
            "previous_status": self.previous_status.value if self.previous_status else None,
            "new_status": self.new_status.value if self.new_status else None,
            "notes": self.notes,
            "user_id": self.user_id,
            "created_at": self.created_at,
        }


@dataclass
class DashboardStats:
    """Time-windowed aggregates over booking requests"""

    total_requests: int = 0
    new_requests: int = 0
    confirmed_requests: int = 0
    cancelled_requests: int = 0
    total_revenue: int = 0
    average_booking_value: float = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
