"""
Cart Router

Cart endpoints over the caller's CartStore. Product fields (name, price,
image) are looked up server side and captured when an item is added.
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import get_user_cart
from storefront.cart import CartStore
from storefront.errors import ERROR_PRODUCT_NOT_FOUND
from storefront.logging import get_logger
from storefront.services.database import get_database
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("")
async def get_cart(cart: CartStore = Depends(get_user_cart)):
    return cart.summary()


@router.post("/items")
async def add_to_cart(request: AddToCartRequest, cart: CartStore = Depends(get_user_cart)):
    """Add a product, accumulating quantity if it is already in the cart."""
    db = get_database()
    product = await db.get_product_by_id(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    try:
        await asyncio.to_thread(cart.add, product, request.quantity)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))

    return cart.summary()


@router.patch("/items/{product_id}")
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    cart: CartStore = Depends(get_user_cart),
):
    """Set item quantity (0 = remove). Unknown products are ignored."""
    try:
        await asyncio.to_thread(cart.update_quantity, product_id, request.quantity)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    return cart.summary()


@router.delete("/items/{product_id}")
async def remove_cart_item(product_id: str, cart: CartStore = Depends(get_user_cart)):
    await asyncio.to_thread(cart.remove, product_id)
    return cart.summary()


@router.delete("")
async def clear_cart(cart: CartStore = Depends(get_user_cart)):
    await asyncio.to_thread(cart.clear)
    return cart.summary()
