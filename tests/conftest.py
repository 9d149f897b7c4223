"""
Pytest configuration and shared fixtures for the order service.

Every test gets its own app wired to a fresh SQLite file, so ids start at 1
and no state leaks between tests.
"""
import pytest
from fastapi.testclient import TestClient

from services.order_service.main import create_app
from shared.config.settings import Settings

TEST_API_KEY = "test-orders-key"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}",
        api_key=TEST_API_KEY,
        order_rate_limit="1000/minute",
        metrics_enabled=False,
        tracing_enabled=False,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_order():
    return {
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "product": "Espresso machine",
        "phone": "+33 6 12 34 56 78",
        "comment": "Leave at the door",
    }


@pytest.fixture
def create_order(client, sample_order):
    """Post an order through the intake endpoint and return its id."""
    def _create(**overrides) -> int:
        response = client.post("/insert_order", data={**sample_order, **overrides})
        assert response.status_code == 200, response.text
        return response.json()["id"]
    return _create


@pytest.fixture
def list_orders(client):
    def _list() -> list[dict]:
        response = client.get("/api/get_orders", params={"key": TEST_API_KEY})
        assert response.status_code == 200, response.text
        return response.json()["orders"]
    return _list
