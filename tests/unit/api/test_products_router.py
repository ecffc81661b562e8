"""Tests for the products router."""

from collections.abc import Generator
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tourbook.services import ProductService


@pytest.fixture
def client(seeded_store) -> Generator[TestClient, None, None]:
    from api.routers.products import router

    seeded_store.seed(
        "products",
        {
            "id": "prod_kayak01",
            "shop_id": "shop_kabira",
            "title_ko": "맹그로브 카약",
            "title_ja": "マングローブカヤック",
            "category": "kayak",
            "difficulty": "all",
            "duration_minutes": 180,
            "price_adult_krw": 30000,
            "is_active": True,
            "is_popular": False,
            "created_at": "2026-02-01 00:00:00.000Z",
        },
    )
    with patch("api.routers.products.get_product_service", return_value=ProductService(seeded_store)):
        app = FastAPI()
        app.include_router(router)
        yield TestClient(app)


class TestCatalog:
    def test_list_newest_first(self, client: TestClient) -> None:
        response = client.get("/api/products")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == ["prod_kayak01", "prod_snorkel01"]

    def test_list_filters(self, client: TestClient) -> None:
        response = client.get("/api/products", params=[("category", "kayak"), ("category", "diving")])

        assert [p["id"] for p in response.json()] == ["prod_kayak01"]

    def test_price_filter(self, client: TestClient) -> None:
        response = client.get("/api/products", params={"max_price": 20000})

        assert [p["id"] for p in response.json()] == ["prod_snorkel01"]

    def test_popular(self, client: TestClient) -> None:
        assert [p["id"] for p in client.get("/api/products/popular").json()] == ["prod_snorkel01"]

    def test_search(self, client: TestClient) -> None:
        response = client.get("/api/products/search", params={"q": "カヤック", "locale": "ja"})

        assert [p["id"] for p in response.json()] == ["prod_kayak01"]

    def test_search_unknown_locale_is_422(self, client: TestClient) -> None:
        assert client.get("/api/products/search", params={"q": "dive", "locale": "en"}).status_code == 422

    def test_counts_by_category(self, client: TestClient) -> None:
        assert client.get("/api/products/categories/counts").json() == {"snorkel": 1, "kayak": 1}

    def test_by_category(self, client: TestClient) -> None:
        assert [p["id"] for p in client.get("/api/products/category/kayak").json()] == ["prod_kayak01"]

    def test_get_product(self, client: TestClient) -> None:
        response = client.get("/api/products/prod_snorkel01")

        assert response.status_code == 200
        assert response.json()["price_child_krw"] == 5000

    def test_get_missing_product_is_404(self, client: TestClient) -> None:
        assert client.get("/api/products/missing").status_code == 404


class TestSaveProduct:
    def test_put_creates_product(self, client: TestClient, seeded_store) -> None:
        response = client.put(
            "/api/products/prod_stars01",
            json={"title_ko": "별 관측", "title_ja": "星空観察", "category": "stargazing", "price_adult_krw": 40000},
        )

        assert response.status_code == 200
        assert response.json()["id"] == "prod_stars01"
        assert seeded_store.get("products", "prod_stars01")["price_adult_krw"] == 40000

    def test_put_updates_existing_product(self, client: TestClient, seeded_store) -> None:
        response = client.put(
            "/api/products/prod_snorkel01",
            json={"title_ko": "스노클링", "title_ja": "シュノーケル", "category": "snorkel", "price_adult_krw": 12000},
        )

        assert response.status_code == 200
        assert seeded_store.get("products", "prod_snorkel01")["price_adult_krw"] == 12000

    def test_put_rejects_unknown_category(self, client: TestClient) -> None:
        response = client.put("/api/products/p1", json={"title_ko": "a", "title_ja": "b", "category": "skydiving"})

        assert response.status_code == 422

    def test_put_rejects_negative_price(self, client: TestClient) -> None:
        response = client.put(
            "/api/products/p1", json={"title_ko": "a", "title_ja": "b", "price_adult_krw": -1}
        )

        assert response.status_code == 422
