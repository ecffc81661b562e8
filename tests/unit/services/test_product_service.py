"""Tests for the product catalog service."""

from __future__ import annotations

import pytest

from tourbook.data.repositories import ProductFilters
from tourbook.errors import InvalidArgumentError, NotFoundError
from tourbook.models import Product
from tourbook.services.product_service import ProductService


def _product(product_id: str, **fields) -> dict:
    record = {
        "id": product_id,
        "shop_id": "shop_kabira",
        "title_ko": f"투어 {product_id}",
        "title_ja": f"ツアー {product_id}",
        "category": "snorkel",
        "difficulty": "beginner",
        "duration_minutes": 120,
        "price_adult_krw": 10000,
        "is_active": True,
        "is_popular": False,
        "created_at": "2026-01-01 00:00:00.000Z",
    }
    record.update(fields)
    return record


@pytest.fixture
def catalog(memory_store):
    memory_store.seed("products", _product("p_snorkel", created_at="2026-01-01 00:00:00.000Z", is_popular=True))
    memory_store.seed(
        "products",
        _product(
            "p_dive",
            category="diving",
            difficulty="advanced",
            price_adult_krw=50000,
            duration_minutes=240,
            title_ja="体験ダイビング",
            description_ko="맨타 포인트 다이빙",
            created_at="2026-02-01 00:00:00.000Z",
            is_popular=True,
        ),
    )
    memory_store.seed(
        "products",
        _product("p_kayak", category="kayak", price_adult_krw=30000, created_at="2026-03-01 00:00:00.000Z"),
    )
    memory_store.seed("products", _product("p_retired", category="kayak", is_active=False, is_popular=True))
    return memory_store


@pytest.fixture
def service(catalog):
    return ProductService(catalog)


class TestListing:
    def test_active_products_newest_first(self, service):
        assert [p.id for p in service.get_products()] == ["p_kayak", "p_dive", "p_snorkel"]

    def test_inactive_listing(self, service):
        assert [p.id for p in service.get_products(ProductFilters(is_active=False))] == ["p_retired"]

    def test_category_and_difficulty_filters(self, service):
        by_category = service.get_products(ProductFilters(categories=["kayak", "diving"]))
        by_difficulty = service.get_products(ProductFilters(difficulties=["advanced"]))

        assert {p.id for p in by_category} == {"p_kayak", "p_dive"}
        assert [p.id for p in by_difficulty] == ["p_dive"]

    def test_price_and_duration_bounds(self, service):
        priced = service.get_products(ProductFilters(min_price=20000, max_price=40000))
        short = service.get_products(ProductFilters(max_duration=180))

        assert [p.id for p in priced] == ["p_kayak"]
        assert {p.id for p in short} == {"p_kayak", "p_snorkel"}

    def test_popular_excludes_inactive_and_honors_limit(self, service):
        popular = service.get_popular_products()

        assert {p.id for p in popular} == {"p_snorkel", "p_dive"}
        assert len(service.get_popular_products(limit=1)) == 1

    def test_by_category(self, service):
        assert [p.id for p in service.get_products_by_category("kayak")] == ["p_kayak"]

    def test_count_by_category_ignores_inactive(self, service):
        assert service.get_product_count_by_category() == {"snorkel": 1, "diving": 1, "kayak": 1}


class TestGetProduct:
    def test_found(self, service):
        assert service.get_product("p_dive").category == "diving"

    def test_missing(self, service):
        with pytest.raises(NotFoundError):
            service.get_product("missing")


class TestSearch:
    def test_searches_title_case_insensitively(self, service):
        results = service.search_products("투어 P_KAYAK")

        assert [p.id for p in results] == ["p_kayak"]

    def test_searches_description(self, service):
        assert [p.id for p in service.search_products("맨타")] == ["p_dive"]

    def test_japanese_locale_uses_japanese_fields(self, service):
        assert [p.id for p in service.search_products("ダイビング", locale="ja")] == ["p_dive"]
        assert service.search_products("ダイビング", locale="ko") == []

    def test_blank_term_returns_nothing(self, service):
        assert service.search_products("   ") == []

    def test_unknown_locale(self, service):
        with pytest.raises(InvalidArgumentError):
            service.search_products("dive", locale="en")


class TestSaveProduct:
    def test_updates_existing_product(self, service, catalog):
        product = service.get_product("p_kayak")
        product.price_adult_krw = 35000

        saved = service.save_product(product)

        assert saved.price_adult_krw == 35000
        assert catalog.get("products", "p_kayak")["price_adult_krw"] == 35000
        assert len(catalog.table("products")) == 4

    def test_inserts_new_product(self, service, catalog):
        saved = service.save_product(Product(id="p_stars", title_ko="별 관측", title_ja="星空観察", category="stargazing"))

        assert saved.id == "p_stars"
        assert catalog.get("products", "p_stars")["category"] == "stargazing"
