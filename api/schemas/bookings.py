"""
Pydantic schemas for booking request endpoints.
"""

from __future__ import annotations

from datetime import date as date_type

from pydantic import BaseModel, Field, field_validator

from tourbook.models import BookingRequest, Product, RequestLog, RequestStatus


class BookingRequestCreate(BaseModel):
    """Request model for creating a booking request."""

    product_id: str
    user_name: str = Field(min_length=1)
    user_phone: str = Field(min_length=1)
    user_email: str | None = None
    user_kakao_id: str | None = None
    date: date_type
    adult_count: int
    child_count: int = 0
    special_requests: str | None = None
    pickup_location: str | None = None


class StatusTransitionRequest(BaseModel):
    """Request body for the status transition endpoint."""

    status: str
    note: str | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        """Validate that status is a known RequestStatus."""
        valid_statuses = [s.value for s in RequestStatus]
        if v not in valid_statuses:
            raise ValueError(f"invalid status: {v}. Must be one of {valid_statuses}")
        return v


class CancelRequest(BaseModel):
    reason: str | None = None


class MemoCreate(BaseModel):
    notes: str = Field(min_length=1)
    user_id: str | None = None


class ProductSummaryResponse(BaseModel):
    """Product details shown next to a booking on confirmation and my-bookings pages."""

    id: str
    title_ko: str
    title_ja: str
    category: str
    duration_minutes: int | None = None
    price_adult_krw: int | None = None
    price_child_krw: int | None = None
    images: list[str] = []

    @classmethod
    def from_domain(cls, product: Product) -> ProductSummaryResponse:
        return cls(
            id=product.id,
            title_ko=product.title_ko,
            title_ja=product.title_ja,
            category=product.category,
            duration_minutes=product.duration_minutes,
            price_adult_krw=product.price_adult_krw,
            price_child_krw=product.price_child_krw,
            images=product.images,
        )


class BookingRequestResponse(BaseModel):
    """Response model for booking requests."""

    id: str
    product_id: str
    user_name: str
    user_phone: str
    user_email: str | None = None
    user_kakao_id: str | None = None
    date: str
    adult_count: int
    child_count: int
    special_requests: str | None = None
    pickup_location: str | None = None
    total_amount: int
    currency: str
    status: str
    created_at: str | None = None
    updated_at: str | None = None
    product: ProductSummaryResponse | None = None

    @classmethod
    def from_domain(cls, request: BookingRequest) -> BookingRequestResponse:
        product = ProductSummaryResponse.from_domain(request.product) if request.product else None
        return cls(**request.to_record(), product=product)


class RequestLogResponse(BaseModel):
    """Response model for request_logs rows."""

    id: str | None = None
    request_id: str
    action: str
    previous_status: str | None = None
    new_status: str | None = None
    notes: str | None = None
    user_id: str | None = None
    created_at: str | None = None

    @classmethod
    def from_domain(cls, log: RequestLog) -> RequestLogResponse:
        return cls(**log.to_record())


class BookingListResponse(BaseModel):
    """Admin listing: the requests plus counts per status over all requests."""

    requests: list[BookingRequestResponse]
    counts: dict[str, int]


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    requests: list[BookingRequestResponse]
    stats: dict[str, int]
