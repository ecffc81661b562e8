"""Tests for the API's shared PocketBase client and service factories."""

from unittest.mock import patch

import pytest

from tourbook.data.pocketbase_store import PocketBaseStore
from tourbook.services import BookingService, DashboardService, ProductService


class TestServiceFactories:
    def test_services_share_the_module_store(self) -> None:
        from api import dependencies

        assert isinstance(dependencies.store, PocketBaseStore)
        assert dependencies.store.pb is dependencies.pb

        booking = dependencies.get_booking_service()
        assert isinstance(booking, BookingService)
        assert booking.store is dependencies.store
        assert booking.currency == "KRW"
        assert isinstance(dependencies.get_dashboard_service(), DashboardService)
        assert isinstance(dependencies.get_product_service(), ProductService)


class TestAuthenticatePb:
    @pytest.mark.asyncio
    async def test_uses_superusers_collection(self) -> None:
        from api import dependencies

        with patch.object(dependencies, "pb") as mock_pb:
            await dependencies.authenticate_pb()

        mock_pb.collection.assert_called_once_with("_superusers")
        mock_pb.collection.return_value.auth_with_password.assert_called_once()

    @pytest.mark.asyncio
    async def test_failure_propagates(self) -> None:
        from api import dependencies

        with patch.object(dependencies, "pb") as mock_pb:
            mock_pb.collection.return_value.auth_with_password.side_effect = RuntimeError("unreachable")
            with pytest.raises(RuntimeError):
                await dependencies.authenticate_pb()
