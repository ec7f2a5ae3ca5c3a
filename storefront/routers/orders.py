"""
Orders Router

Checkout from the caller's cart, order history, and admin order management.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import AuthUser, get_user_cart, verify_admin, verify_session
from storefront.cart import CartStore
from storefront.errors import (
    ERROR_ORDER_ACCESS_DENIED,
    ERROR_ORDER_INVALID_STATUS,
    ERROR_ORDER_NOT_FOUND,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.checkout import place_order
from storefront.services.database import get_database
from storefront.services.models import ORDER_STATUSES
from .models import CreateOrderRequest, UpdateOrderStatusRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("")
async def list_orders(user: AuthUser = Depends(verify_session)):
    """Admins see every order, customers only their own."""
    db = get_database()
    if user.is_admin:
        orders = await db.get_all_orders()
    else:
        orders = await db.get_user_orders(user.id)
    return [o.model_dump(mode="json") for o in orders]


@router.get("/{order_id}")
async def get_order(order_id: str, user: AuthUser = Depends(verify_session)):
    db = get_database()
    order = await db.get_order_by_id(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    if order.user_id != user.id and not user.is_admin:
        raise HTTPException(status_code=403, detail=ERROR_ORDER_ACCESS_DENIED)
    return order.model_dump(mode="json")


@router.post("", status_code=201)
async def create_order(request: CreateOrderRequest, cart: CartStore = Depends(get_user_cart)):
    """Place an order for everything in the cart, then empty the cart."""
    db = get_database()
    try:
        result = await place_order(db, cart, shipping_address=request.shipping_address)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        logger.error(f"Checkout failed for {sanitize_id_for_logging(cart.identity)}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create order")
    return {**result.order.model_dump(mode="json"), "cart_cleared": result.cart_cleared}


@router.put("/{order_id}")
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    admin: AuthUser = Depends(verify_admin),
):
    if request.status not in ORDER_STATUSES:
        raise HTTPException(status_code=400, detail=ERROR_ORDER_INVALID_STATUS)

    db = get_database()
    order = await db.update_order_status(order_id, request.status)
    if not order:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    logger.info(f"Order {sanitize_id_for_logging(order_id)} -> {request.status}")
    return order.model_dump(mode="json")


@router.delete("/{order_id}")
async def delete_order(order_id: str, admin: AuthUser = Depends(verify_admin)):
    db = get_database()
    if not await db.delete_order(order_id):
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    return {"success": True}
