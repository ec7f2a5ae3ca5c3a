"""
Repository Pattern for Database Operations

- UserRepository: accounts, roles
- ProductRepository: product catalog
- OrderRepository: orders placed from carts
"""
from .user_repo import UserRepository
from .product_repo import ProductRepository
from .order_repo import OrderRepository

__all__ = [
    "UserRepository",
    "ProductRepository",
    "OrderRepository",
]
