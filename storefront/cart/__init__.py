"""Cart package: line items, storage backends, store and provisioning scope."""
from .identity import IdentityProvider, ROLE_ADMIN, ROLE_USER
from .models import LineItem, dump_items, load_items
from .provider import CartProvider, use_cart
from .storage import (
    CART_KEY_PREFIX,
    KeyValueStorage,
    MemoryStorage,
    RedisStorage,
    get_cart_storage,
    set_cart_storage,
    storage_key,
)
from .store import CartStore

__all__ = [
    "CART_KEY_PREFIX",
    "CartProvider",
    "CartStore",
    "IdentityProvider",
    "KeyValueStorage",
    "LineItem",
    "MemoryStorage",
    "ROLE_ADMIN",
    "ROLE_USER",
    "RedisStorage",
    "dump_items",
    "get_cart_storage",
    "load_items",
    "set_cart_storage",
    "storage_key",
    "use_cart",
]
