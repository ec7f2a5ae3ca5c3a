"""Key-value storage backends for persisted carts."""
import os
import threading
from typing import Dict, Optional, Protocol

import httpx
from upstash_redis.errors import UpstashError

from storefront.errors import StorageError
from storefront.logging import get_logger

logger = get_logger(__name__)

_TRANSPORT_ERRORS = (UpstashError, httpx.HTTPError, OSError)

# Key prefix for per-user carts: cartItems_{user_id}
CART_KEY_PREFIX = "cartItems_"


def storage_key(identity: Optional[str]) -> Optional[str]:
    """
    Storage key for an identity's cart.

    Returns None for an anonymous identity; anonymous carts are never persisted.
    """
    if not identity:
        return None
    return f"{CART_KEY_PREFIX}{identity}"


class KeyValueStorage(Protocol):
    """Synchronous string key-value store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage. Default backend and test double."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data


class RedisStorage:
    """
    Upstash Redis storage.

    Keys are written without a TTL; a cart lives until it is overwritten.
    Transport failures are re-raised as StorageError.
    """

    def __init__(self, client=None):
        self._client = client  # Lazy initialization

    @property
    def client(self):
        """Get Redis client (lazy initialization)."""
        if self._client is None:
            from storefront.db import get_redis_sync

            try:
                self._client = get_redis_sync()
            except ValueError as e:
                raise StorageError(f"Redis not available: {e}") from e
        return self._client

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.client.get(key)
        except _TRANSPORT_ERRORS as e:
            raise StorageError(f"Failed to read {key}: {e}") from e
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except _TRANSPORT_ERRORS as e:
            raise StorageError(f"Failed to write {key}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except _TRANSPORT_ERRORS as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e


_cart_storage: Optional[KeyValueStorage] = None


def get_cart_storage() -> KeyValueStorage:
    """
    Get cart storage singleton.

    Backend is selected by CART_STORAGE: "redis" or "memory" (default).
    """
    global _cart_storage
    if _cart_storage is None:
        backend = os.environ.get("CART_STORAGE", "memory").lower()
        if backend == "redis":
            _cart_storage = RedisStorage()
        elif backend == "memory":
            _cart_storage = MemoryStorage()
        else:
            raise ValueError(f"Unknown CART_STORAGE backend: {backend}")
        logger.info(f"Cart storage backend: {backend}")
    return _cart_storage


def set_cart_storage(storage: Optional[KeyValueStorage]) -> None:
    """Replace the storage singleton (None resets to env-driven selection)."""
    global _cart_storage
    _cart_storage = storage
