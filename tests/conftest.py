"""
Root test configuration and fixtures for the tourbook project.

This conftest.py provides common fixtures for all test categories:
- unit/: Fast, isolated unit tests

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import sys
from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tests.fixtures.memory_store import MemoryStore  # noqa: E402

FIXED_NOW = datetime(2026, 10, 19, 9, 30, 0, tzinfo=UTC)


def create_mock_pocketbase():
    """Create a mock PocketBase instance."""
    mock_pb = Mock()

    mock_collection = Mock()
    mock_collection.auth_with_password = Mock(return_value=True)

    mock_list_response = Mock()
    mock_list_response.items = []
    mock_list_response.total_items = 0
    mock_list_response.total_pages = 1
    mock_list_response.page = 1
    mock_list_response.per_page = 30

    mock_collection.get_full_list = Mock(return_value=[])
    mock_collection.get_list = Mock(return_value=mock_list_response)
    mock_collection.get_one = Mock(return_value=SimpleNamespace(id="mock-id"))
    mock_collection.create = Mock(return_value=SimpleNamespace(id="mock-id"))
    mock_collection.update = Mock(return_value=SimpleNamespace(id="mock-id"))

    mock_pb.collection = Mock(return_value=mock_collection)
    mock_pb.send = Mock(return_value=[])

    mock_pb.auth_store = Mock()
    mock_pb.auth_store.token = "mock-token"

    return mock_pb


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Automatically mock PocketBase to prevent real connections.

    Set SKIP_MOCKING=true to run against a live PocketBase.
    """
    if os.environ.get("SKIP_MOCKING") == "true":
        yield {}
        return

    mock_pb = create_mock_pocketbase()

    with patch("pocketbase.PocketBase") as mock_pb_class:
        mock_pb_class.return_value = mock_pb
        yield {"pocketbase": mock_pb}


@pytest.fixture
def fixed_clock():
    """Clock pinned to FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def memory_store(fixed_clock) -> MemoryStore:
    return MemoryStore(clock=fixed_clock)


@pytest.fixture
def sample_product_record():
    """Snorkel tour priced 10000 adult / 5000 child."""
    return {
        "id": "prod_snorkel01",
        "shop_id": "shop_kabira",
        "title_ko": "카비라만 스노클링",
        "title_ja": "川平湾シュノーケリング",
        "description_ko": "산호초 스노클링 투어",
        "description_ja": "サンゴ礁シュノーケルツアー",
        "category": "snorkel",
        "difficulty": "beginner",
        "duration_minutes": 120,
        "price_adult_krw": 10000,
        "price_child_krw": 5000,
        "images": [],
        "is_active": True,
        "is_popular": True,
        "created_at": "2026-01-10 00:00:00.000Z",
        "updated_at": "2026-01-10 00:00:00.000Z",
    }


@pytest.fixture
def seeded_store(memory_store, sample_product_record) -> MemoryStore:
    memory_store.seed("products", sample_product_record)
    return memory_store


def make_request_record(
    status: str = "new",
    total_amount: int = 25000,
    created_at: str = "2026-10-18 12:00:00.000Z",
    **overrides,
):
    """A stored `requests` record with sensible defaults."""
    record = {
        "product_id": "prod_snorkel01",
        "user_name": "김민지",
        "user_phone": "010-1234-5678",
        "date": "2026-11-02",
        "adult_count": 2,
        "child_count": 1,
        "total_amount": total_amount,
        "currency": "KRW",
        "status": status,
        "created_at": created_at,
        "updated_at": created_at,
    }
    record.update(overrides)
    return record


@pytest.fixture
def request_record_factory():
    return make_request_record
