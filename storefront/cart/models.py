"""Cart line items and their storage representation."""
import json
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from storefront.services.money import multiply, parse_price, to_decimal


@dataclass
class LineItem:
    """One product in the cart, with fields captured when it was added."""
    product_id: str
    name: str
    price: Decimal
    quantity: int
    image: Optional[str] = None

    def __post_init__(self):
        self.price = to_decimal(self.price)

    @property
    def line_total(self) -> Decimal:
        """Captured price times quantity."""
        return multiply(self.price, self.quantity)

    def copy(self) -> "LineItem":
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to dictionary. Price is written as a string to keep Decimal exact."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": str(self.price),
            "image": self.image,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        """
        Create from dictionary.

        Raises:
            ValueError: If a required field is missing or has the wrong shape
        """
        try:
            product_id = data["product_id"]
            name = data["name"]
            quantity = data["quantity"]
            price = parse_price(data["price"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed line item: {e}") from e

        if not isinstance(product_id, str) or not product_id:
            raise ValueError("product_id must be a non-empty string")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError("quantity must be a positive integer")

        image = data.get("image")
        return cls(
            product_id=product_id,
            name=str(name) if name is not None else "",
            price=price,
            quantity=quantity,
            image=str(image) if image is not None else None,
        )

    @classmethod
    def from_product(cls, product: Any, quantity: int) -> "LineItem":
        """
        Capture a product's fields into a new line item.

        Accepts a mapping or any object with attributes. The identifier is
        read from ``id``, ``_id`` or ``product_id``, in that order.
        """
        product_id = _product_field(product, "id", "_id", "product_id")
        if product_id is None or str(product_id) == "":
            raise ValueError("product must have an id")
        image = _product_field(product, "image", "image_url")
        return cls(
            product_id=str(product_id),
            name=str(_product_field(product, "name") or ""),
            price=parse_price(_product_field(product, "price") or 0),
            quantity=quantity,
            image=str(image) if image is not None else None,
        )


def _product_field(product: Any, *names: str) -> Any:
    for name in names:
        if isinstance(product, Mapping):
            value = product.get(name)
        else:
            value = getattr(product, name, None)
        if value is not None:
            return value
    return None


def dump_items(items: Iterable[LineItem]) -> str:
    """Serialize line items to a JSON array, preserving order."""
    return json.dumps([item.to_dict() for item in items])


def load_items(raw: str) -> List[LineItem]:
    """
    Parse a JSON array written by dump_items.

    Raises:
        ValueError: If the payload is not valid JSON, not a list, contains
            duplicate product ids, or any entry is malformed
    """
    data = json.loads(raw)  # JSONDecodeError is a ValueError
    if not isinstance(data, list):
        raise ValueError("Cart payload must be a list")

    items = []
    seen = set()
    for entry in data:
        if not isinstance(entry, Mapping):
            raise ValueError("Cart entries must be objects")
        item = LineItem.from_dict(entry)
        if item.product_id in seen:
            raise ValueError(f"Duplicate product in cart: {item.product_id}")
        seen.add(item.product_id)
        items.append(item)
    return items
