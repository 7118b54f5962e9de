"""
repositories.py — Document-Store Access for Users and Orders

Thin wrappers around the MongoDB collections `users`, `orders` and
`products`. All methods return plain, JSON-safe dicts (ObjectIds and
datetimes converted to strings) so results can be returned by the API and
written to the cache unchanged.

References between documents are stored as ObjectIds when the given id is a
valid 24-hex ObjectId, otherwise as the raw string.
"""

import logging
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import DESCENDING

log = logging.getLogger(__name__)

ORDER_STATUS_PENDING = "pending"

USER_FIELDS = {"name": 1, "email": 1}
PRODUCT_FIELDS = {"name": 1, "price": 1}


def as_document_id(value):
    """Converts a client-supplied id into the value stored in `_id`."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def serialize(value):
    """Recursively converts BSON-specific values into JSON-compatible ones."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize(item) for item in value]
    return value


class UserRepository:
    """Read-only access to the `users` collection."""

    def __init__(self, db):
        self.collection = db["users"]

    def find_by_id(self, user_id: str):
        """
        Loads a user document.

        Args:
            user_id (str): ObjectId hex string or raw string id.

        Returns:
            dict | None: The serialized user, or None if it does not exist.
        """
        user = self.collection.find_one({"_id": as_document_id(user_id)})
        return serialize(user) if user else None


class OrderRepository:
    """
    Access to the `orders` collection.

    Reads populate the `user` reference and each line's `product` reference
    from the `users` and `products` collections.
    """

    def __init__(self, db):
        self.collection = db["orders"]
        self.users = db["users"]
        self.products = db["products"]

    def create(self, user_id: str, products: list, total_amount: float) -> dict:
        """
        Inserts a new order in status 'pending'.

        Args:
            user_id (str): Owning user.
            products (list): Line item dicts with 'id', 'quantity' and 'price'.
            total_amount (float): Validated order total.

        Returns:
            dict: The stored document including its new `_id`.
        """
        document = {
            "user": as_document_id(user_id),
            "products": [
                {
                    "product": as_document_id(item.get("id")),
                    "quantity": item["quantity"],
                    "price": item["price"],
                }
                for item in products
            ],
            "totalAmount": total_amount,
            "status": ORDER_STATUS_PENDING,
            "createdAt": datetime.now(timezone.utc),
        }
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        log.info(f"[Order: {result.inserted_id}] Bestellung gespeichert.")
        return serialize(document)

    def find_all(self) -> list:
        """Returns all orders, newest first, with users and products populated."""
        orders = list(self.collection.find().sort("createdAt", DESCENDING))
        return serialize(self._populate(orders))

    def find_by_id(self, order_id: str):
        order = self.collection.find_one({"_id": as_document_id(order_id)})
        if order is None:
            return None
        return serialize(self._populate([order])[0])

    def find_by_id_and_delete(self, order_id: str):
        """
        Deletes an order and returns the removed document.

        Returns:
            dict | None: The deleted order, or None if nothing matched.
        """
        order = self.collection.find_one_and_delete({"_id": as_document_id(order_id)})
        return serialize(order) if order else None

    def _populate(self, orders: list) -> list:
        user_ids = {order["user"] for order in orders if order.get("user") is not None}
        product_ids = {
            line["product"]
            for order in orders
            for line in order.get("products", [])
            if line.get("product") is not None
        }

        users = {}
        if user_ids:
            users = {
                user["_id"]: user
                for user in self.users.find({"_id": {"$in": list(user_ids)}}, USER_FIELDS)
            }
        products = {}
        if product_ids:
            products = {
                product["_id"]: product
                for product in self.products.find({"_id": {"$in": list(product_ids)}}, PRODUCT_FIELDS)
            }

        for order in orders:
            if order.get("user") is not None:
                order["user"] = users.get(order["user"], order["user"])
            for line in order.get("products", []):
                if line.get("product") is not None:
                    line["product"] = products.get(line["product"], line["product"])
        return orders
