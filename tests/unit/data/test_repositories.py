"""Tests for the repositories' query construction.

Uses a Mock store so the exact Query each repository builds is visible.
"""

from __future__ import annotations

from unittest.mock import Mock

from tourbook.data.repositories import (
    ProductFilters,
    ProductRepository,
    RequestLogRepository,
    RequestRepository,
)
from tourbook.data.store import Condition
from tourbook.models import BookingRequest, LogAction, RequestLog, RequestStatus


def _store(select=None, insert=None):
    store = Mock()
    store.select.return_value = select or []
    store.insert.return_value = insert or {}
    return store


def _query(store):
    table, query = store.select.call_args.args
    return table, query


class TestRequestRepository:
    def test_create_does_not_send_store_assigned_fields(self, request_record_factory):
        stored = request_record_factory(id="req_1")
        store = _store(insert=stored)
        request = BookingRequest.from_record(request_record_factory(id="ignored", created_at="x"))

        created = RequestRepository(store).create(request)

        table, data = store.insert.call_args.args
        assert table == "requests"
        assert "id" not in data and "created_at" not in data and "updated_at" not in data
        assert data["status"] == "new"
        assert created.id == "req_1"

    def test_list_by_phone_query(self):
        store = _store()

        RequestRepository(store).list_by_phone("010-1234-5678")

        table, query = _query(store)
        assert table == "requests"
        assert query.conditions == [Condition(("user_phone",), "=", "010-1234-5678")]
        assert (query.order_by, query.descending) == ("created_at", True)
        assert query.expand == ["product_id"]

    def test_get_expands_product(self, request_record_factory, sample_product_record):
        record = request_record_factory(id="req_1", expand={"product_id": sample_product_record})
        store = Mock()
        store.get.return_value = record

        request = RequestRepository(store).get("req_1")

        store.get.assert_called_once_with("requests", "req_1", expand=["product_id"])
        assert request.product.title_ja == "川平湾シュノーケリング"

    def test_create_never_sends_expanded_product(self, request_record_factory, sample_product_record):
        store = _store(insert=request_record_factory(id="req_1"))
        request = BookingRequest.from_record(request_record_factory(expand={"product_id": sample_product_record}))

        RequestRepository(store).create(request)

        _, data = store.insert.call_args.args
        assert "product" not in data and "expand" not in data

    def test_list_with_status(self):
        store = _store()

        RequestRepository(store).list(RequestStatus.PAID)

        _, query = _query(store)
        assert query.conditions == [Condition(("status",), "=", "paid")]

    def test_created_since_with_shop_traverses_product(self):
        store = _store()

        RequestRepository(store).fetch_created_since("2026-09-19 09:30:00.000Z", shop_id="shop_1")

        _, query = _query(store)
        assert query.conditions == [
            Condition(("product_id.shop_id",), "=", "shop_1"),
            Condition(("created_at",), ">=", "2026-09-19 09:30:00.000Z"),
        ]

    def test_status_update_op_is_guarded(self):
        op = RequestRepository(_store()).status_update_op(
            "req_1", RequestStatus.CONFIRMED, "2026-10-19 09:30:00.000Z", expected_status=RequestStatus.PAID
        )

        assert op.action == "update"
        assert op.record_id == "req_1"
        assert op.data == {"status": "confirmed", "updated_at": "2026-10-19 09:30:00.000Z"}
        assert op.expect == {"status": "paid"}


class TestRequestLogRepository:
    def test_append_op_omits_unset_fields(self):
        log = RequestLog(request_id="req_1", action=LogAction.ADMIN_MEMO, notes="called")

        op = RequestLogRepository(_store()).append_op(log)

        assert op.action == "create"
        assert op.table == "request_logs"
        assert op.data == {"request_id": "req_1", "action": "admin_memo", "notes": "called"}

    def test_list_for_request_newest_first(self):
        store = _store(select=[{"id": "l1", "request_id": "req_1", "action": "status_change", "new_status": "paid"}])

        logs = RequestLogRepository(store).list_for_request("req_1")

        _, query = _query(store)
        assert query.conditions == [Condition(("request_id",), "=", "req_1")]
        assert query.descending is True
        assert logs[0].new_status is RequestStatus.PAID


class TestProductRepository:
    def test_default_filters_only_active(self):
        store = _store()

        ProductRepository(store).list()

        _, query = _query(store)
        assert query.conditions == [Condition(("is_active",), "=", True)]

    def test_all_filters(self):
        store = _store()
        filters = ProductFilters(
            categories=["diving"], difficulties=["beginner", "all"], min_price=1000, max_price=9000, max_duration=90
        )

        ProductRepository(store).list(filters)

        _, query = _query(store)
        assert query.conditions == [
            Condition(("is_active",), "=", True),
            Condition(("category",), "in", ("diving",)),
            Condition(("difficulty",), "in", ("beginner", "all")),
            Condition(("price_adult_krw",), ">=", 1000),
            Condition(("price_adult_krw",), "<=", 9000),
            Condition(("duration_minutes",), "<=", 90),
        ]

    def test_popular_limit(self):
        store = _store()

        ProductRepository(store).list_popular(6)

        _, query = _query(store)
        assert query.limit == 6
        assert Condition(("is_popular",), "=", True) in query.conditions
