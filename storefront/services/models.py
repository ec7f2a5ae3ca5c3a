"""Database Models - Pydantic models for all entities."""
from decimal import Decimal
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from storefront.services.money import to_decimal as _to_decimal

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")


class User(BaseModel):
    """User model."""
    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields from DB

    id: str
    name: str
    email: str
    role: str = "user"  # user | admin
    password_hash: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def public_dict(self) -> dict:
        """User fields safe to return to clients."""
        return self.model_dump(mode="json", exclude={"password_hash"})


class Product(BaseModel):
    """Product model."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    image: Optional[str] = None
    category: Optional[str] = None
    stock: int = 0
    created_at: Optional[datetime] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)


class OrderItem(BaseModel):
    """Line of an order, copied from the cart at checkout."""
    product_id: str
    name: str
    price: Decimal
    image: Optional[str] = None
    quantity: int

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)


class Order(BaseModel):
    """Order model."""
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    items: list[OrderItem] = []
    total_price: Decimal
    status: str = "pending"
    shipping_address: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("total_price", mode="before")
    @classmethod
    def convert_total_to_decimal(cls, v):
        return _to_decimal(v)
