"""
API Request Models

Shared pydantic models for all storefront endpoints.
"""
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# ==================== AUTH MODELS ====================

class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # bcrypt only hashes the first 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


# ==================== PRODUCT MODELS ====================

class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    stock: int = Field(default=0, ge=0)


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    quantity: int


# ==================== ORDER MODELS ====================

class CreateOrderRequest(BaseModel):
    shipping_address: Optional[str] = None


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ==================== USER MODELS ====================

class UpdateUserRoleRequest(BaseModel):
    role: str
