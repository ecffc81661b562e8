"""
Products Router - Tour product catalog endpoints.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Query

from tourbook.data.repositories import ProductFilters
from tourbook.errors import BookingError
from tourbook.models import Product

from ..dependencies import get_product_service
from ..schemas.products import ProductResponse, ProductUpsert
from ..utils.http_errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    category: list[str] | None = Query(None),
    difficulty: list[str] | None = Query(None),
    min_price: int | None = Query(None, ge=0),
    max_price: int | None = Query(None, ge=0),
    max_duration: int | None = Query(None, ge=1, description="Maximum duration in minutes"),
    is_active: bool = Query(True),
) -> list[ProductResponse]:
    """Catalog listing, newest first."""
    filters = ProductFilters(
        categories=category,
        difficulties=difficulty,
        min_price=min_price,
        max_price=max_price,
        max_duration=max_duration,
        is_active=is_active,
    )
    service = get_product_service()
    try:
        products = await asyncio.to_thread(service.get_products, filters)
    except BookingError as e:
        raise to_http_exception(e) from e
    return [ProductResponse.from_domain(p) for p in products]


@router.get("/popular", response_model=list[ProductResponse])
async def popular_products(limit: int = Query(6, ge=1, le=100)) -> list[ProductResponse]:
    service = get_product_service()
    try:
        products = await asyncio.to_thread(service.get_popular_products, limit)
    except BookingError as e:
        raise to_http_exception(e) from e
    return [ProductResponse.from_domain(p) for p in products]


@router.get("/search", response_model=list[ProductResponse])
async def search_products(
    q: str = Query(..., min_length=1),
    locale: str = Query("ko"),
) -> list[ProductResponse]:
    service = get_product_service()
    try:
        products = await asyncio.to_thread(service.search_products, q, locale)
    except BookingError as e:
        raise to_http_exception(e) from e
    return [ProductResponse.from_domain(p) for p in products]


@router.get("/categories/counts", response_model=dict[str, int])
async def product_counts_by_category() -> dict[str, int]:
    service = get_product_service()
    try:
        return await asyncio.to_thread(service.get_product_count_by_category)
    except BookingError as e:
        raise to_http_exception(e) from e


@router.get("/category/{category}", response_model=list[ProductResponse])
async def products_by_category(category: str, limit: int = Query(10, ge=1, le=100)) -> list[ProductResponse]:
    service = get_product_service()
    try:
        products = await asyncio.to_thread(service.get_products_by_category, category, limit)
    except BookingError as e:
        raise to_http_exception(e) from e
    return [ProductResponse.from_domain(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    service = get_product_service()
    try:
        product = await asyncio.to_thread(service.get_product, product_id)
    except BookingError as e:
        raise to_http_exception(e) from e
    return ProductResponse.from_domain(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def save_product(product_id: str, body: ProductUpsert) -> ProductResponse:
    """Create or replace a product (admin product editor)."""
    product = Product(id=product_id, **body.model_dump())
    service = get_product_service()
    try:
        saved = await asyncio.to_thread(service.save_product, product)
    except BookingError as e:
        raise to_http_exception(e) from e
    return ProductResponse.from_domain(saved)
