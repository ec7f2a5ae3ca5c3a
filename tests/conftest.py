"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock, Mock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("CART_STORAGE", "memory")

from storefront.auth import session as session_module
from storefront.cart import MemoryStorage, set_cart_storage
from storefront.services.database import Database, set_database
from storefront.services.models import Order, Product, User


@pytest.fixture(autouse=True)
def reset_state():
    """Fresh sessions, cart storage and database for every test."""
    session_module._web_sessions.clear()
    set_cart_storage(None)
    set_database(None)
    yield
    session_module._web_sessions.clear()
    set_cart_storage(None)
    set_database(None)


@pytest.fixture
def storage():
    """Stand-in for the browser-local key-value store"""
    storage = MemoryStorage()
    set_cart_storage(storage)
    return storage


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client; every query chain ends in an awaitable execute()"""
    client = Mock()

    table_mock = Mock()
    for method in ("select", "insert", "update", "delete", "eq", "ilike", "order", "limit"):
        getattr(table_mock, method).return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = table_mock
    return client


@pytest.fixture
def mock_database(mock_supabase_client):
    """Database instance over the mock client"""
    return Database(mock_supabase_client)


@pytest.fixture
def sample_user():
    """Sample user row"""
    return {
        "id": "user-123",
        "name": "Test User",
        "email": "test@example.com",
        "role": "user",
        "password_hash": None,
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_product():
    """Sample product row"""
    return {
        "id": "product-123",
        "name": "Desk Lamp",
        "description": "Warm white LED lamp",
        "price": "24.99",
        "image": "/uploads/lamp.png",
        "category": "lighting",
        "stock": 12,
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_order():
    """Sample order row"""
    return {
        "id": "order-123",
        "user_id": "user-123",
        "items": [
            {
                "product_id": "product-123",
                "name": "Desk Lamp",
                "price": "24.99",
                "image": "/uploads/lamp.png",
                "quantity": 2,
            }
        ],
        "total_price": "49.98",
        "status": "pending",
        "shipping_address": "1 Main St",
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def api_db(sample_user, sample_product, sample_order):
    """Mock Database installed as the app's singleton"""
    db = Mock(spec=Database)
    db.get_user_by_id = AsyncMock(return_value=User(**sample_user))
    db.get_user_by_email = AsyncMock(return_value=None)
    db.create_user = AsyncMock(return_value=User(**sample_user))
    db.get_users = AsyncMock(return_value=[User(**sample_user)])
    db.update_user_role = AsyncMock(return_value=User(**{**sample_user, "role": "admin"}))
    db.delete_user = AsyncMock(return_value=True)
    db.get_user_stats = AsyncMock(return_value={"total_users": 1, "admins": 0, "customers": 1})
    db.get_products = AsyncMock(return_value=[Product(**sample_product)])
    db.get_product_by_id = AsyncMock(return_value=Product(**sample_product))
    db.create_product = AsyncMock(return_value=Product(**sample_product))
    db.update_product = AsyncMock(return_value=Product(**sample_product))
    db.delete_product = AsyncMock(return_value=True)
    db.create_order = AsyncMock(return_value=Order(**sample_order))
    db.get_order_by_id = AsyncMock(return_value=Order(**sample_order))
    db.get_user_orders = AsyncMock(return_value=[Order(**sample_order)])
    db.get_all_orders = AsyncMock(return_value=[Order(**sample_order)])
    db.update_order_status = AsyncMock(return_value=Order(**{**sample_order, "status": "shipped"}))
    db.delete_order = AsyncMock(return_value=True)
    set_database(db)
    return db


@pytest.fixture
def user_token():
    """Session token for a regular user"""
    return session_module.create_web_session("user-123", "test@example.com", "user")


@pytest.fixture
def admin_token():
    """Session token for an admin"""
    return session_module.create_web_session("admin-1", "admin@example.com", "admin")


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
