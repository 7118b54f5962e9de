"""
Tests for the MongoDB repositories with mocked collections.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo import DESCENDING

from order_service.repositories import (
    OrderRepository,
    UserRepository,
    as_document_id,
    serialize,
)

USER_ID = ObjectId("64b7f0c2a1b2c3d4e5f60001")
PRODUCT_ID = ObjectId("64b7f0c2a1b2c3d4e5f60002")
ORDER_ID = ObjectId("64b7f0c2a1b2c3d4e5f60003")


@pytest.fixture
def db():
    return {"users": MagicMock(), "orders": MagicMock(), "products": MagicMock()}


def test_as_document_id():
    assert as_document_id(str(USER_ID)) == USER_ID
    assert as_document_id("user1") == "user1"
    assert as_document_id(None) is None


def test_serialize_converts_bson_values():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert serialize({"_id": ORDER_ID, "items": [{"p": PRODUCT_ID}], "at": created}) == {
        "_id": str(ORDER_ID),
        "items": [{"p": str(PRODUCT_ID)}],
        "at": "2024-01-01T00:00:00+00:00",
    }


def test_find_user(db):
    db["users"].find_one.return_value = {"_id": USER_ID, "email": "test@test.com"}

    user = UserRepository(db).find_by_id(str(USER_ID))

    assert user == {"_id": str(USER_ID), "email": "test@test.com"}
    db["users"].find_one.assert_called_once_with({"_id": USER_ID})


def test_find_missing_user(db):
    db["users"].find_one.return_value = None

    assert UserRepository(db).find_by_id("user1") is None


def test_create_order(db):
    db["orders"].insert_one.return_value = MagicMock(inserted_id=ORDER_ID)

    order = OrderRepository(db).create(
        user_id="user1",
        products=[{"id": str(PRODUCT_ID), "quantity": 2, "price": 100.0}, {"id": None, "quantity": 1, "price": 5.0}],
        total_amount=205.0,
    )

    stored = db["orders"].insert_one.call_args.args[0]
    assert stored["user"] == "user1"
    assert stored["products"][0]["product"] == PRODUCT_ID
    assert stored["products"][1]["product"] is None
    assert order["_id"] == str(ORDER_ID)
    assert order["status"] == "pending"
    assert order["totalAmount"] == 205.0
    assert isinstance(order["createdAt"], str)


def test_find_all_populates_references(db):
    db["orders"].find.return_value.sort.return_value = [
        {"_id": ORDER_ID, "user": USER_ID, "products": [{"product": PRODUCT_ID, "quantity": 1, "price": 2000}]},
    ]
    db["users"].find.return_value = [{"_id": USER_ID, "name": "Jonah", "email": "jonah@test.com"}]
    db["products"].find.return_value = [{"_id": PRODUCT_ID, "name": "Laptop", "price": 2000}]

    result = OrderRepository(db).find_all()

    assert result == [{
        "_id": str(ORDER_ID),
        "user": {"_id": str(USER_ID), "name": "Jonah", "email": "jonah@test.com"},
        "products": [{"product": {"_id": str(PRODUCT_ID), "name": "Laptop", "price": 2000}, "quantity": 1, "price": 2000}],
    }]
    db["users"].find.assert_called_once_with({"_id": {"$in": [USER_ID]}}, {"name": 1, "email": 1})
    db["orders"].find.return_value.sort.assert_called_once_with("createdAt", DESCENDING)


def test_find_all_keeps_dangling_references(db):
    db["orders"].find.return_value.sort.return_value = [
        {"_id": ORDER_ID, "user": "user1", "products": [{"product": None, "quantity": 1, "price": 1}]},
    ]
    db["users"].find.return_value = []

    result = OrderRepository(db).find_all()

    assert result[0]["user"] == "user1"
    assert result[0]["products"][0]["product"] is None
    db["products"].find.assert_not_called()


def test_find_by_id_missing(db):
    db["orders"].find_one.return_value = None

    assert OrderRepository(db).find_by_id(str(ORDER_ID)) is None
    db["orders"].find_one.assert_called_once_with({"_id": ORDER_ID})


def test_find_by_id_and_delete(db):
    db["orders"].find_one_and_delete.return_value = {"_id": ORDER_ID, "user": USER_ID}

    deleted = OrderRepository(db).find_by_id_and_delete(str(ORDER_ID))

    assert deleted == {"_id": str(ORDER_ID), "user": str(USER_ID)}
