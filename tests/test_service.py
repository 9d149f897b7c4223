import asyncio
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from services.order_service.main import create_app
from services.order_service.repository import OrderRepository
from services.order_service.service import MAX_ORDER_ID, OrderService, parse_order_id
from shared.config.settings import Settings
from shared.errors import InvalidInput, StorageFailure, Unauthorized


class TestParseOrderId:

    @pytest.mark.parametrize("raw, expected", [
        ("1", 1),
        (" 42 ", 42),
        ("007", 7),
        (str(MAX_ORDER_ID), MAX_ORDER_ID),
        (str(MAX_ORDER_ID + 1), MAX_ORDER_ID + 1),
    ])
    def test_valid(self, raw, expected):
        assert parse_order_id(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "0", "000", "-1", "+5", "1e3", "4.0", "1_000", "abc"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidInput, match="Invalid id"):
            parse_order_id(raw)

    def test_very_long_id_is_out_of_range(self):
        assert parse_order_id("9" * 5000) > MAX_ORDER_ID


class TestErrors:

    def test_unauthorized_body(self):
        error = Unauthorized()

        assert error.status_code == 401
        assert error.to_body() == {"error": "Unauthorized"}

    def test_invalid_input_custom_message(self):
        error = InvalidInput("Missing fields")

        assert error.status_code == 400
        assert error.to_body() == {"error": "Missing fields"}

    def test_storage_failure_reference_is_opaque(self):
        first, second = StorageFailure("create_order"), StorageFailure("create_order")

        assert first.status_code == 500
        assert first.to_body() == {"error": "Storage failure", "code": first.reference}
        assert first.reference != second.reference
        assert first.operation == "create_order"


class TestOrderServiceStorage:

    def test_failed_statement_is_rolled_back(self, monkeypatch):
        async def failing_list(db, status, limit):
            raise OperationalError("SELECT orders", {}, Exception("connection reset"))

        monkeypatch.setattr(OrderRepository, "list_by_status", staticmethod(failing_list))
        db = AsyncMock()

        with pytest.raises(StorageFailure) as excinfo:
            asyncio.run(OrderService.list_pending(db, 50))

        db.rollback.assert_awaited_once()
        assert excinfo.value.operation == "list_pending"

    def test_os_error_is_storage_failure(self, monkeypatch):
        async def refused(db, order_id):
            raise ConnectionRefusedError(111, "Connect call failed")

        monkeypatch.setattr(OrderRepository, "mark_processed", staticmethod(refused))
        db = AsyncMock()

        with pytest.raises(StorageFailure):
            asyncio.run(OrderService.mark_processed(db, 7))

        db.rollback.assert_awaited_once()

    def test_out_of_range_id_skips_update(self, monkeypatch):
        repository_update = AsyncMock()
        monkeypatch.setattr(OrderRepository, "mark_processed", repository_update)

        changed = asyncio.run(OrderService.mark_processed(AsyncMock(), MAX_ORDER_ID + 1))

        assert changed is False
        repository_update.assert_not_awaited()


class TestStartup:

    def test_connection_failure_aborts_start_up(self, tmp_path):
        settings = Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'orders.db'}",
            api_key="k",
            metrics_enabled=False,
        )
        app = create_app(settings)

        with pytest.raises(OperationalError):
            with TestClient(app):
                pass

    def test_existing_table_is_reused(self, settings, sample_order):
        with TestClient(create_app(settings)) as client:
            first = client.post("/insert_order", data=sample_order).json()["id"]

        with TestClient(create_app(settings)) as client:
            second = client.post("/insert_order", data=sample_order).json()["id"]

        assert second > first
