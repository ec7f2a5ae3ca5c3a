"""
Common Errors

Centralized error messages to avoid string duplication, plus the
exception types shared across the package.
"""

# User errors
ERROR_USER_NOT_FOUND = "User not found"
ERROR_INVALID_CREDENTIALS = "Invalid email or password"
ERROR_EMAIL_TAKEN = "Email is already registered"
ERROR_ADMIN_REQUIRED = "Admin access required"

# Order errors
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_ORDER_ACCESS_DENIED = "Order does not belong to user"
ERROR_ORDER_INVALID_STATUS = "Invalid order status"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Cart errors
ERROR_CART_EMPTY = "Cart is empty"
ERROR_CART_SCOPE = "use_cart() must be called inside a CartProvider scope"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class StorageError(StorefrontError):
    """Key-value storage backend failed to read or write."""


class CartScopeError(StorefrontError, RuntimeError):
    """Cart accessor used outside of a provisioning scope.

    This is a programming error, not an anonymous session: an anonymous
    user inside a scope gets an empty cart instead.
    """

    def __init__(self, message: str = ERROR_CART_SCOPE):
        super().__init__(message)
