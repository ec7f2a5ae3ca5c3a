"""Checkout: turn the caller's cart into an order."""
import asyncio
from dataclasses import dataclass
from typing import Optional

from storefront.cart import CartStore
from storefront.errors import ERROR_CART_EMPTY
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.database import Database
from storefront.services.models import Order, OrderItem

logger = get_logger(__name__)


@dataclass
class CheckoutResult:
    """Stored order plus whether the persisted cart was emptied."""
    order: Order
    cart_cleared: bool


def _empty_cart(cart: CartStore) -> bool:
    if cart.clear():
        return True
    # The order exists; a cart left in storage could be ordered again
    logger.error(
        f"Cart for {sanitize_id_for_logging(cart.identity)} not cleared after checkout, deleting key"
    )
    return cart.discard()


async def place_order(db: Database, cart: CartStore, shipping_address: Optional[str] = None) -> CheckoutResult:
    """
    Store an order for the cart's current contents, then clear the cart.

    The cart is cleared only after the order row exists, so a failed insert
    leaves the cart untouched. If writing the empty cart fails, the storage
    key is deleted instead. ``cart_cleared`` is False only when both fail.

    Raises:
        ValueError: If the cart is anonymous or empty
    """
    if cart.identity is None:
        raise ValueError("Anonymous carts cannot be checked out")

    lines = cart.items
    if not lines:
        raise ValueError(ERROR_CART_EMPTY)

    items = [
        OrderItem(
            product_id=line.product_id,
            name=line.name,
            price=line.price,
            image=line.image,
            quantity=line.quantity,
        )
        for line in lines
    ]
    order = await db.create_order(
        user_id=cart.identity,
        items=items,
        total_price=cart.total_price(),
        shipping_address=shipping_address,
    )
    cleared = await asyncio.to_thread(_empty_cart, cart)
    if not cleared:
        logger.error(
            f"Order {sanitize_id_for_logging(order.id)} placed but cart for "
            f"{sanitize_id_for_logging(cart.identity)} is still stored"
        )

    logger.info(
        f"Order {sanitize_id_for_logging(order.id)} placed by "
        f"{sanitize_id_for_logging(cart.identity)}: {len(items)} lines, total {order.total_price}"
    )
    return CheckoutResult(order=order, cart_cleared=cleared)
