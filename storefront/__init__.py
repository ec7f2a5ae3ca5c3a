"""
Storefront Core Package

This package contains the storefront backend:
- cart: per-user cart store with key-value persistence
- auth: web sessions, password hashing, route guards
- services: Supabase database access (users, products, orders)
- routers: FastAPI routers mounted by api/index.py

Note: Imports are lazy so that the cart package can be used without
the web stack being importable.
"""

__all__ = [
    "get_redis_sync",
    "CartStore",
    "CartProvider",
    "use_cart",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "get_redis_sync":
        from storefront.db import get_redis_sync
        return get_redis_sync
    elif name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "CartProvider":
        from storefront.cart import CartProvider
        return CartProvider
    elif name == "use_cart":
        from storefront.cart import use_cart
        return use_cart
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
