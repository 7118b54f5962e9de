"""
dependencies.py — FastAPI Dependency Providers

Each endpoint receives its collaborators through these providers, so tests can
replace them via `app.dependency_overrides`.
"""

from .cache import OrderCache
from .clients import PaymentClient
from .database import get_database, get_redis
from .repositories import OrderRepository, UserRepository


def get_user_repository() -> UserRepository:
    return UserRepository(get_database())


def get_order_repository() -> OrderRepository:
    return OrderRepository(get_database())


def get_order_cache() -> OrderCache:
    return OrderCache(get_redis())


def get_payment_client():
    """Yields a PaymentClient per request and closes its HTTP session afterwards."""
    client = PaymentClient()
    try:
        yield client
    finally:
        client.close()
