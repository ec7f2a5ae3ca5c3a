"""Per-user cart store mirrored to key-value storage."""
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from storefront.errors import StorageError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.money import round_money, to_float

from .models import LineItem, dump_items, load_items
from .storage import KeyValueStorage, storage_key

logger = get_logger(__name__)


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass; True is not a quantity
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    return value


class CartStore:
    """
    Cart for whichever identity is currently active.

    Every identity change reloads the cart from storage before any further
    mutation is accepted. Every mutation ends with an explicit save() under
    the key of the current identity. Anonymous carts stay in memory.

    Usage:
        store = CartStore(MemoryStorage())
        store.on_identity_change("u1")
        store.add({"id": "p1", "name": "Lamp", "price": "10.00"}, 2)
        store.total_price()  # Decimal("20.00")
    """

    def __init__(self, storage: KeyValueStorage, identity: Optional[str] = None):
        self._storage = storage
        self._identity: Optional[str] = None
        self._key: Optional[str] = None
        self._items: List[LineItem] = []
        self.on_identity_change(identity)

    @property
    def identity(self) -> Optional[str]:
        return self._identity

    @property
    def key(self) -> Optional[str]:
        """Storage key for the current identity, None when anonymous."""
        return self._key

    @property
    def items(self) -> Tuple[LineItem, ...]:
        """Snapshot of the current line items, in insertion order."""
        return tuple(item.copy() for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    # ==================== IDENTITY ====================

    def on_identity_change(self, identity: Optional[str]) -> None:
        """Switch to the cart of ``identity``, replacing the in-memory cart."""
        self._identity = identity or None
        self._key = storage_key(self._identity)
        self._items = self._load() if self._key else []

    def _load(self) -> List[LineItem]:
        try:
            raw = self._storage.get(self._key)
        except StorageError as e:
            logger.error(f"Failed to read cart for {sanitize_id_for_logging(self._identity)}: {e}")
            return []

        if not raw:
            return []

        try:
            return load_items(raw)
        except ValueError as e:
            logger.warning(f"Corrupted cart data for {sanitize_id_for_logging(self._identity)}: {e}")
            return []

    # ==================== MUTATIONS ====================

    def add(self, product: Any, quantity: int = 1) -> LineItem:
        """
        Add ``quantity`` units of ``product``.

        An existing line for the same product accumulates quantity and keeps
        its captured fields; otherwise a new line is appended.

        Raises:
            ValueError: If quantity is not a positive integer or product has no id
        """
        _require_int("quantity", quantity)
        if quantity < 1:
            raise ValueError("quantity must be a positive integer")

        new_item = LineItem.from_product(product, quantity)
        existing = self._find(new_item.product_id)
        if existing is not None:
            existing.quantity += quantity
            item = existing
        else:
            self._items.append(new_item)
            item = new_item

        self.save()
        return item.copy()

    def remove(self, product_id: str) -> None:
        """Remove the line for ``product_id``; unknown ids are ignored."""
        self._items = [item for item in self._items if item.product_id != product_id]
        self.save()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """
        Overwrite the quantity of ``product_id``. Zero or less removes the line.

        Raises:
            ValueError: If quantity is not an integer
        """
        _require_int("quantity", quantity)
        if quantity <= 0:
            self.remove(product_id)
            return

        item = self._find(product_id)
        if item is not None:
            item.quantity = quantity
        self.save()

    def clear(self) -> bool:
        """Empty the cart. The empty list is persisted, the key is kept.

        Returns:
            The result of save().
        """
        self._items = []
        return self.save()

    def discard(self) -> bool:
        """Empty the cart and delete its key, so the next load starts empty."""
        self._items = []
        if self._key is None:
            return False
        try:
            self._storage.delete(self._key)
        except StorageError as e:
            logger.error(f"Failed to delete cart for {sanitize_id_for_logging(self._identity)}: {e}")
            return False
        return True

    def _find(self, product_id: str) -> Optional[LineItem]:
        return next((item for item in self._items if item.product_id == product_id), None)

    # ==================== PERSISTENCE ====================

    def save(self) -> bool:
        """
        Write the whole cart under the current key.

        Returns:
            True if written, False for anonymous carts or when storage failed.
            On failure the in-memory cart stays authoritative.
        """
        if self._key is None:
            return False
        try:
            self._storage.set(self._key, dump_items(self._items))
        except StorageError as e:
            logger.error(f"Failed to save cart for {sanitize_id_for_logging(self._identity)}: {e}")
            return False
        return True

    # ==================== TOTALS ====================

    def total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def total_price(self) -> Decimal:
        """Sum of captured price times quantity, rounded to cents."""
        return round_money(sum((item.line_total for item in self._items), Decimal("0")))

    def summary(self) -> dict:
        """Cart view for API responses."""
        return {
            "is_empty": not self._items,
            "total_items": self.total_items(),
            "total_price": to_float(self.total_price()),
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "image": item.image,
                    "price": to_float(item.price),
                    "quantity": item.quantity,
                    "total": to_float(item.line_total),
                }
                for item in self._items
            ],
        }
