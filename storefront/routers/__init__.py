"""Storefront API Router.

Combines all sub-routers into a single router with prefix /api.
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .cart import router as cart_router
from .orders import router as orders_router
from .products import router as products_router
from .users import router as users_router

router = APIRouter(prefix="/api")

router.include_router(auth_router)
router.include_router(products_router)
router.include_router(cart_router)
router.include_router(orders_router)
router.include_router(users_router)

__all__ = ["router"]
