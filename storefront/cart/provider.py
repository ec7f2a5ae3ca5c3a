"""Cart provisioning scope bound to an identity provider."""
from contextvars import ContextVar, Token
from typing import Callable, Optional

from storefront.errors import CartScopeError

from .identity import IdentityProvider
from .storage import KeyValueStorage, get_cart_storage
from .store import CartStore

_active_cart: ContextVar[Optional[CartStore]] = ContextVar("_active_cart", default=None)


class CartProvider:
    """
    Binds a CartStore to an IdentityProvider for the duration of a ``with`` block.

    The store is returned from ``__enter__`` so callers can pass it around
    explicitly; code that cannot be handed the store reaches it via use_cart().

    Usage:
        identity = IdentityProvider()
        with CartProvider(identity, MemoryStorage()) as cart:
            identity.login("u1")
            cart.add(product)
    """

    def __init__(self, identity: IdentityProvider, storage: Optional[KeyValueStorage] = None):
        self.identity = identity
        self.storage = storage if storage is not None else get_cart_storage()
        self.store: Optional[CartStore] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._token: Optional[Token] = None

    def __enter__(self) -> CartStore:
        if self.store is not None:
            raise RuntimeError("CartProvider is already active")
        self.store = CartStore(self.storage, self.identity.current)
        self._unsubscribe = self.identity.subscribe(self.store.on_identity_change)
        self._token = _active_cart.set(self.store)
        return self.store

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._token is not None:
            _active_cart.reset(self._token)
            self._token = None
        self.store = None


def use_cart() -> CartStore:
    """
    Get the cart store of the innermost active CartProvider.

    Raises:
        CartScopeError: If called outside any CartProvider scope
    """
    store = _active_cart.get()
    if store is None:
        raise CartScopeError()
    return store
