"""
Pydantic schemas for product catalog endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from tourbook.models import Difficulty, Product, ProductCategory


class ProductResponse(BaseModel):
    """Response model for products."""

    id: str
    shop_id: str | None = None
    title_ko: str
    title_ja: str
    description_ko: str | None = None
    description_ja: str | None = None
    category: str
    difficulty: str | None = None
    duration_minutes: int | None = None
    price_adult_krw: int | None = None
    price_child_krw: int | None = None
    images: list[str] = Field(default_factory=list)
    is_active: bool
    is_popular: bool
    display_order: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_domain(cls, product: Product) -> ProductResponse:
        return cls(**product.to_record())


class ProductUpsert(BaseModel):
    """Request body for the admin product editor."""

    shop_id: str | None = None
    title_ko: str = Field(min_length=1)
    title_ja: str = Field(min_length=1)
    description_ko: str | None = None
    description_ja: str | None = None
    category: str = ProductCategory.OTHER.value
    difficulty: str | None = None
    duration_minutes: int | None = Field(default=None, ge=0)
    price_adult_krw: int | None = Field(default=None, ge=0)
    price_child_krw: int | None = Field(default=None, ge=0)
    images: list[str] = Field(default_factory=list)
    is_active: bool = True
    is_popular: bool = False
    display_order: int | None = None

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        valid = [c.value for c in ProductCategory]
        if v not in valid:
            raise ValueError(f"invalid category: {v}. Must be one of {valid}")
        return v

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, v: str | None) -> str | None:
        valid = [d.value for d in Difficulty]
        if v is not None and v not in valid:
            raise ValueError(f"invalid difficulty: {v}. Must be one of {valid}")
        return v
