"""Tests for database operations"""
import pytest
from decimal import Decimal
from unittest.mock import Mock

from storefront.services.models import OrderItem


def set_rows(client, rows):
    client.table.return_value.execute.return_value = Mock(data=rows)


@pytest.mark.asyncio
async def test_get_user_by_email_lowercases(mock_database, mock_supabase_client, sample_user):
    set_rows(mock_supabase_client, [sample_user])

    user = await mock_database.get_user_by_email("Test@Example.com")

    assert user.id == "user-123"
    mock_supabase_client.table.return_value.eq.assert_called_with("email", "test@example.com")


@pytest.mark.asyncio
async def test_get_user_not_found(mock_database):
    user = await mock_database.get_user_by_id("missing")
    assert user is None


@pytest.mark.asyncio
async def test_create_user(mock_database, mock_supabase_client, sample_user):
    set_rows(mock_supabase_client, [sample_user])

    user = await mock_database.create_user("Test User", "Test@Example.com", "hash")

    inserted = mock_supabase_client.table.return_value.insert.call_args[0][0]
    assert inserted["email"] == "test@example.com"
    assert inserted["role"] == "user"
    assert user.email == "test@example.com"


@pytest.mark.asyncio
async def test_user_stats(mock_database, mock_supabase_client):
    set_rows(mock_supabase_client, [{"role": "user"}, {"role": "admin"}, {"role": "user"}])

    stats = await mock_database.get_user_stats()

    assert stats == {"total_users": 3, "admins": 1, "customers": 2}


@pytest.mark.asyncio
async def test_delete_user_missing(mock_database):
    assert await mock_database.delete_user("missing") is False


@pytest.mark.asyncio
async def test_get_product_by_id(mock_database, mock_supabase_client, sample_product):
    set_rows(mock_supabase_client, [sample_product])

    product = await mock_database.get_product_by_id("product-123")

    assert product.name == "Desk Lamp"
    assert product.price == Decimal("24.99")


@pytest.mark.asyncio
async def test_get_products_filters(mock_database, mock_supabase_client, sample_product):
    set_rows(mock_supabase_client, [sample_product])
    table = mock_supabase_client.table.return_value

    products = await mock_database.get_products(category="lighting", search="lamp")

    assert len(products) == 1
    table.eq.assert_called_with("category", "lighting")
    table.ilike.assert_called_with("name", "%lamp%")


@pytest.mark.asyncio
async def test_update_product_missing(mock_database):
    assert await mock_database.update_product("missing", {"name": "x"}) is None


@pytest.mark.asyncio
async def test_create_order_serializes_prices(mock_database, mock_supabase_client, sample_order):
    set_rows(mock_supabase_client, [sample_order])
    items = [OrderItem(product_id="product-123", name="Desk Lamp", price="24.99", quantity=2)]

    order = await mock_database.create_order("user-123", items, Decimal("49.98"), "1 Main St")

    inserted = mock_supabase_client.table.return_value.insert.call_args[0][0]
    assert inserted["total_price"] == "49.98"
    assert inserted["items"][0]["price"] == "24.99"
    assert inserted["status"] == "pending"
    assert order.total_price == Decimal("49.98")
    assert order.items[0].quantity == 2


@pytest.mark.asyncio
async def test_get_user_orders(mock_database, mock_supabase_client, sample_order):
    set_rows(mock_supabase_client, [sample_order])

    orders = await mock_database.get_user_orders("user-123")

    assert [o.id for o in orders] == ["order-123"]
    mock_supabase_client.table.return_value.eq.assert_called_with("user_id", "user-123")


@pytest.mark.asyncio
async def test_update_order_status(mock_database, mock_supabase_client, sample_order):
    set_rows(mock_supabase_client, [{**sample_order, "status": "shipped"}])

    order = await mock_database.update_order_status("order-123", "shipped")

    assert order.status == "shipped"
    mock_supabase_client.table.return_value.update.assert_called_with({"status": "shipped"})


def test_get_database_requires_init():
    from storefront.services.database import get_database

    with pytest.raises(RuntimeError):
        get_database()
