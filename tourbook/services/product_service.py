"""Product catalog service."""

from __future__ import annotations

from collections import Counter

from ..data.repositories import ProductFilters, ProductRepository
from ..data.store import PRODUCTS, DataStore
from ..errors import InvalidArgumentError, NotFoundError
from ..models import Product

SEARCH_LOCALES = ("ko", "ja")


class ProductService:
    """Read-side catalog queries plus the admin product save."""

    def __init__(self, store: DataStore) -> None:
        self.products = ProductRepository(store)

    def get_products(self, filters: ProductFilters | None = None) -> list[Product]:
        return self.products.list(filters)

    def get_product(self, product_id: str) -> Product:
        product = self.products.get(product_id)
        if product is None:
            raise NotFoundError(PRODUCTS, product_id)
        return product

    def get_popular_products(self, limit: int = 6) -> list[Product]:
        return self.products.list_popular(limit)

    def get_products_by_category(self, category: str, limit: int = 10) -> list[Product]:
        return self.products.list_by_category(category, limit)

    def search_products(self, term: str, locale: str = "ko") -> list[Product]:
        """Match `term` against the title and description of one locale."""
        if locale not in SEARCH_LOCALES:
            raise InvalidArgumentError(f"locale must be one of {SEARCH_LOCALES}, got {locale!r}")
        term = term.strip()
        if not term:
            return []
        return self.products.search(term, [f"title_{locale}", f"description_{locale}"])

    def get_product_count_by_category(self) -> dict[str, int]:
        return dict(Counter(c for c in self.products.fetch_active_categories() if c))

    def save_product(self, product: Product) -> Product:
        return self.products.upsert(product)
