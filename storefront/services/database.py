"""
Supabase Database Service

Provides Database class with all operations via Repository pattern.

Usage:
    from storefront.services.database import get_database

    # At FastAPI startup (lifespan):
    await init_database()

    db = get_database()
    product = await db.get_product_by_id("p1")
"""

from decimal import Decimal
from typing import Any, Optional

from supabase._async.client import AsyncClient

from storefront.logging import get_logger
from storefront.services.models import Order, OrderItem, Product, User
from storefront.services.repositories import (
    OrderRepository,
    ProductRepository,
    UserRepository,
)

logger = get_logger(__name__)


class Database:
    """
    Supabase database client with all operations.

    Uses Repository pattern internally but exposes a flat API to routers.
    Must be created via `create()` or `init_database()`.
    """

    def __init__(self, client: AsyncClient):
        self.client = client
        self._users_repo = UserRepository(self.client)
        self._products_repo = ProductRepository(self.client)
        self._orders_repo = OrderRepository(self.client)

    @classmethod
    async def create(cls) -> "Database":
        """Async factory: builds the Supabase client from environment."""
        from storefront.db import get_supabase

        return cls(await get_supabase())

    # ==================== USER OPERATIONS ====================

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self._users_repo.get_by_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self._users_repo.get_by_email(email)

    async def create_user(self, name: str, email: str, password_hash: str, role: str = "user") -> User:
        return await self._users_repo.create(name, email, password_hash, role)

    async def get_users(self) -> list[User]:
        return await self._users_repo.get_all()

    async def update_user_role(self, user_id: str, role: str) -> Optional[User]:
        return await self._users_repo.update_role(user_id, role)

    async def delete_user(self, user_id: str) -> bool:
        return await self._users_repo.delete(user_id)

    async def get_user_stats(self) -> dict[str, int]:
        """Totals per role plus overall user count."""
        counts = await self._users_repo.count_by_role()
        return {
            "total_users": sum(counts.values()),
            "admins": counts.get("admin", 0),
            "customers": counts.get("user", 0),
        }

    # ==================== PRODUCT OPERATIONS ====================

    async def get_products(self, category: Optional[str] = None, search: Optional[str] = None) -> list[Product]:
        return await self._products_repo.get_all(category=category, search=search)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return await self._products_repo.get_by_id(product_id)

    async def create_product(self, data: dict[str, Any]) -> Product:
        return await self._products_repo.create(data)

    async def update_product(self, product_id: str, data: dict[str, Any]) -> Optional[Product]:
        return await self._products_repo.update(product_id, data)

    async def delete_product(self, product_id: str) -> bool:
        return await self._products_repo.delete(product_id)

    # ==================== ORDER OPERATIONS ====================

    async def create_order(
        self,
        user_id: str,
        items: list[OrderItem],
        total_price: Decimal,
        shipping_address: Optional[str] = None,
    ) -> Order:
        return await self._orders_repo.create(user_id, items, total_price, shipping_address)

    async def get_order_by_id(self, order_id: str) -> Optional[Order]:
        return await self._orders_repo.get_by_id(order_id)

    async def get_user_orders(self, user_id: str, limit: int = 50) -> list[Order]:
        return await self._orders_repo.get_by_user(user_id, limit=limit)

    async def get_all_orders(self, status: Optional[str] = None, limit: int = 100) -> list[Order]:
        return await self._orders_repo.get_all(status=status, limit=limit)

    async def update_order_status(self, order_id: str, status: str) -> Optional[Order]:
        return await self._orders_repo.update_status(order_id, status)

    async def delete_order(self, order_id: str) -> bool:
        return await self._orders_repo.delete(order_id)


# ==================== SINGLETON ====================

_db: Optional[Database] = None


async def init_database() -> Database:
    """Create the database singleton. Call once at startup."""
    global _db
    if _db is None:
        _db = await Database.create()
        logger.info("Database initialized")
    return _db


async def close_database() -> None:
    """Drop the database singleton on shutdown."""
    global _db
    if _db is not None:
        from storefront.db import reset_clients

        reset_clients()
        _db = None
        logger.info("Supabase client closed")


def get_database() -> Database:
    """
    Get database instance.

    Raises:
        RuntimeError: If init_database() has not run
    """
    if _db is None:
        raise RuntimeError("Database not initialized. Call 'await init_database()' at startup.")
    return _db


def set_database(db: Optional[Database]) -> None:
    """Install a database instance directly (tests, scripts)."""
    global _db
    _db = db
