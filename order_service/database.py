"""
database.py — Connection Management for MongoDB and Redis

Both clients are created lazily on first use and shared by all requests of
the process. Sync endpoints run in FastAPI's threadpool, so creation is
guarded by a lock. `close_connections()` is called on application shutdown.
"""

import logging
import threading

import redis
from pymongo import MongoClient

from .config import MONGO_DB_NAME, MONGO_URL, REDIS_URL

log = logging.getLogger(__name__)

_lock = threading.Lock()
_mongo_client = None
_redis_client = None


def get_database():
    """
    Returns the application database, creating the MongoClient on first use.

    Returns:
        pymongo.database.Database: Handle to MONGO_DB_NAME.
    """
    global _mongo_client
    if _mongo_client is None:
        with _lock:
            if _mongo_client is None:
                _mongo_client = MongoClient(MONGO_URL, serverSelectionTimeoutMS=5000)
                log.info(f"MongoDB Client erstellt (DB: {MONGO_DB_NAME}).")
    return _mongo_client[MONGO_DB_NAME]


def get_redis():
    """Returns the shared Redis client (string responses)."""
    global _redis_client
    if _redis_client is None:
        with _lock:
            if _redis_client is None:
                _redis_client = redis.Redis.from_url(REDIS_URL, decode_responses=True)
                log.info("Redis Client erstellt.")
    return _redis_client


def close_connections():
    global _mongo_client, _redis_client
    with _lock:
        if _mongo_client is not None:
            _mongo_client.close()
            _mongo_client = None
        if _redis_client is not None:
            _redis_client.close()
            _redis_client = None
    log.info("Datenbankverbindungen geschlossen.")
