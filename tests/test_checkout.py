"""Tests for checkout from cart"""
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from storefront.cart import CartStore, MemoryStorage
from storefront.errors import StorageError
from storefront.services.checkout import place_order
from storefront.services.models import Order


@pytest.fixture
def db(sample_order):
    db = Mock()
    db.create_order = AsyncMock(return_value=Order(**sample_order))
    return db


@pytest.mark.asyncio
async def test_place_order_snapshots_cart_and_clears_it(db):
    storage = MemoryStorage()
    cart = CartStore(storage, "user-123")
    cart.add({"id": "product-123", "name": "Desk Lamp", "price": "24.99"}, 2)

    result = await place_order(db, cart, shipping_address="1 Main St")

    kwargs = db.create_order.call_args.kwargs
    assert kwargs["user_id"] == "user-123"
    assert kwargs["total_price"] == Decimal("49.98")
    assert [(i.product_id, i.quantity) for i in kwargs["items"]] == [("product-123", 2)]
    assert kwargs["shipping_address"] == "1 Main St"
    assert result.order.id == "order-123"
    assert result.cart_cleared is True
    assert cart.items == ()
    assert storage.get("cartItems_user-123") == "[]"


@pytest.mark.asyncio
async def test_empty_cart_rejected(db):
    cart = CartStore(MemoryStorage(), "user-123")

    with pytest.raises(ValueError, match="Cart is empty"):
        await place_order(db, cart)

    db.create_order.assert_not_called()


@pytest.mark.asyncio
async def test_anonymous_cart_rejected(db):
    cart = CartStore(MemoryStorage())
    cart.add({"id": "p1", "name": "Lamp", "price": 1})

    with pytest.raises(ValueError):
        await place_order(db, cart)


@pytest.mark.asyncio
async def test_failed_insert_keeps_cart(db):
    db.create_order.side_effect = RuntimeError("insert failed")
    cart = CartStore(MemoryStorage(), "user-123")
    cart.add({"id": "p1", "name": "Lamp", "price": 1}, 3)

    with pytest.raises(RuntimeError):
        await place_order(db, cart)

    assert cart.total_items() == 3


class FailingWritesStorage(MemoryStorage):
    """MemoryStorage whose writes start failing once ``fail_writes`` is set."""

    def __init__(self, fail_deletes: bool = False):
        super().__init__()
        self.fail_writes = False
        self.fail_deletes = fail_deletes

    def set(self, key, value):
        if self.fail_writes:
            raise StorageError("quota")
        super().set(key, value)

    def delete(self, key):
        if self.fail_deletes:
            raise StorageError("quota")
        super().delete(key)


@pytest.mark.asyncio
async def test_failed_clear_deletes_stored_cart(db):
    storage = FailingWritesStorage()
    cart = CartStore(storage, "user-123")
    cart.add({"id": "p1", "name": "Lamp", "price": 1}, 3)
    storage.fail_writes = True

    result = await place_order(db, cart)

    assert result.cart_cleared is True
    assert "cartItems_user-123" not in storage
    assert CartStore(storage, "user-123").total_items() == 0


@pytest.mark.asyncio
async def test_cart_cleared_false_when_storage_rejects_clear_and_delete(db, caplog):
    storage = FailingWritesStorage(fail_deletes=True)
    cart = CartStore(storage, "user-123")
    cart.add({"id": "p1", "name": "Lamp", "price": 1}, 3)
    storage.fail_writes = True

    result = await place_order(db, cart)

    assert result.order.id == "order-123"
    assert result.cart_cleared is False
    assert cart.items == ()
    assert "is still stored" in caplog.text
