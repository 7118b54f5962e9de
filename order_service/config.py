"""
config.py — Environment-based Configuration for the Order Service

All settings are read once at import time from environment variables.
The defaults match a local docker-compose setup.
"""

import os

# Document store (MongoDB)
MONGO_URL = os.environ.get("MONGO_URL", "mongodb://localhost:27017")
MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "orders")

# Key-value store (Redis)
REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
ORDER_CACHE_TTL = int(os.environ.get("ORDER_CACHE_TTL", "600"))

# Payment gateway (normalerweise https://api.paystack.co)
PAYMENT_SERVICE_URL = os.environ.get("PAYMENT_SERVICE_URL", "https://api.paystack.co")
PAYMENT_SECRET_KEY = os.environ.get("PAYMENT_SECRET_KEY", "")
PAYMENT_CALLBACK_URL = os.environ.get("PAYMENT_CALLBACK_URL")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("LOG_FILE")
