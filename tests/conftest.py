"""
Pytest configuration and fixtures.

The API is exercised with FastAPI's TestClient; MongoDB repositories and the
payment client are replaced by mocks, the cache is a real OrderCache on top of
a mocked Redis client.
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from order_service.cache import OrderCache
from order_service.dependencies import (
    get_order_cache,
    get_order_repository,
    get_payment_client,
    get_user_repository,
)
from order_service.main import app


@pytest.fixture
def users():
    repository = MagicMock()
    repository.find_by_id.return_value = {"_id": "user1", "email": "test@test.com"}
    return repository


@pytest.fixture
def orders():
    return MagicMock()


@pytest.fixture
def payment():
    client = MagicMock()
    client.initialize_payment.return_value = {
        "status": True,
        "data": {"authorization_url": "pay_url", "reference": "ref123"},
    }
    return client


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.get.return_value = None
    return client


@pytest.fixture
def cache(redis_client):
    return OrderCache(redis_client, ttl=600)


@pytest.fixture
def client(users, orders, payment, cache):
    """TestClient with all external collaborators overridden."""
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_order_repository] = lambda: orders
    app.dependency_overrides[get_payment_client] = lambda: payment
    app.dependency_overrides[get_order_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_order():
    return {
        "_id": "64b7f0c2a1b2c3d4e5f60718",
        "user": "user1",
        "products": [{"product": None, "quantity": 2, "price": 100}],
        "totalAmount": 200,
        "status": "pending",
        "createdAt": "2024-01-01T00:00:00+00:00",
    }
