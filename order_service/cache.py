"""
cache.py — Read-Through Cache for Order Queries (Redis)

Implements the cache side of the cache-aside pattern used by the order
controller: values are stored as JSON strings with a fixed expiry.

Keys:
    'orders'       → snapshot of the full order list
    'order:<id>'   → snapshot of a single order

A Redis outage must never fail a request: read errors count as a miss and
write errors are only logged.
"""

import json
import logging

from redis.exceptions import RedisError

from .config import ORDER_CACHE_TTL

log = logging.getLogger(__name__)

ORDERS_KEY = "orders"
ORDER_KEY_PREFIX = "order:"


def order_key(order_id: str) -> str:
    return f"{ORDER_KEY_PREFIX}{order_id}"


class OrderCache:
    """
    Wraps a Redis client (created with decode_responses=True).

    Args:
        client: redis.Redis instance or anything exposing get/setex/delete.
        ttl (int): Expiry of every entry in seconds.
    """

    def __init__(self, client, ttl: int = ORDER_CACHE_TTL):
        self.client = client
        self.ttl = ttl

    def get_orders(self):
        """Returns the cached order list, or None on a miss."""
        return self._get(ORDERS_KEY)

    def set_orders(self, orders: list):
        self._set(ORDERS_KEY, orders)

    def get_order(self, order_id: str):
        return self._get(order_key(order_id))

    def set_order(self, order_id: str, order: dict):
        self._set(order_key(order_id), order)

    def invalidate(self, *order_ids):
        """Drops the list snapshot and the entries of the given orders."""
        keys = [ORDERS_KEY] + [order_key(order_id) for order_id in order_ids]
        try:
            self.client.delete(*keys)
        except RedisError as e:
            log.warning(f"[Cache] Invalidierung von {keys} fehlgeschlagen: {e}")

    def _get(self, key: str):
        try:
            cached = self.client.get(key)
        except RedisError as e:
            log.warning(f"[Cache] Lesen von '{key}' fehlgeschlagen, nutze Datenbank: {e}")
            return None
        if cached is None:
            return None
        try:
            return json.loads(cached)
        except json.JSONDecodeError:
            log.error(f"[Cache] Ungültiger Eintrag unter '{key}' wird ignoriert.")
            return None

    def _set(self, key: str, value):
        try:
            self.client.setex(key, self.ttl, json.dumps(value))
        except RedisError as e:
            log.warning(f"[Cache] Schreiben von '{key}' fehlgeschlagen: {e}")
