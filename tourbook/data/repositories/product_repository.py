"""Product repository - catalog reads and the admin upsert on `products`."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...models import Product
from ..store import PRODUCTS, DataStore, Query

logger = logging.getLogger(__name__)


@dataclass
class ProductFilters:
    """Catalog filters. Empty lists and None mean "no constraint"."""

    categories: list[str] | None = None
    difficulties: list[str] | None = None
    min_price: int | None = None
    max_price: int | None = None
    max_duration: int | None = None
    is_active: bool = True


class ProductRepository:
    """Repository for Product data access"""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    def get(self, product_id: str) -> Product | None:
        record = self.store.get(PRODUCTS, product_id)
        return Product.from_record(record) if record else None

    def list(self, filters: ProductFilters | None = None) -> list[Product]:
        """Products matching `filters`, newest first"""
        filters = filters or ProductFilters()
        query = Query().eq("is_active", filters.is_active)

        if filters.categories:
            query.in_("category", filters.categories)
        if filters.difficulties:
            query.in_("difficulty", filters.difficulties)
        if filters.min_price is not None:
            query.gte("price_adult_krw", filters.min_price)
        if filters.max_price is not None:
            query.lte("price_adult_krw", filters.max_price)
        if filters.max_duration:
            query.lte("duration_minutes", filters.max_duration)

        query.order("created_at", descending=True)
        return [Product.from_record(r) for r in self.store.select(PRODUCTS, query)]

    def list_popular(self, limit: int) -> list[Product]:
        query = Query().eq("is_active", True).eq("is_popular", True).take(limit)
        return [Product.from_record(r) for r in self.store.select(PRODUCTS, query)]

    def list_by_category(self, category: str, limit: int) -> list[Product]:
        query = Query().eq("is_active", True).eq("category", category).take(limit)
        return [Product.from_record(r) for r in self.store.select(PRODUCTS, query)]

    def search(self, term: str, fields: list[str]) -> list[Product]:
        """Active products where any of `fields` contains `term`, ignoring case"""
        query = Query().eq("is_active", True).ilike_any(fields, term)
        return [Product.from_record(r) for r in self.store.select(PRODUCTS, query)]

    def fetch_active_categories(self) -> list[str | None]:
        return [r.get("category") for r in self.store.select(PRODUCTS, Query().eq("is_active", True))]

    def upsert(self, product: Product) -> Product:
        data = {k: v for k, v in product.to_record().items() if k not in ("created_at", "updated_at")}
        record = self.store.upsert(PRODUCTS, data)
        logger.info(f"Saved product {record.get('id')}")
        return Product.from_record(record)
