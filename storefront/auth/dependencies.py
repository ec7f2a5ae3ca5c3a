"""FastAPI dependencies for session auth, role gating and the caller's cart."""
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from storefront.cart import CartStore, get_cart_storage
from storefront.errors import ERROR_ADMIN_REQUIRED
from .session import verify_web_session_token


@dataclass(frozen=True)
class AuthUser:
    """Caller resolved from a session token."""
    id: str
    email: str
    role: str
    token: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
        return parts[1]
    return None


async def verify_session(
    authorization: str = Header(None, alias="Authorization"),
) -> AuthUser:
    """Resolve ``Authorization: Bearer <session_token>`` to the caller."""
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="No authorization header")

    session = verify_web_session_token(token)
    if not session:
        raise HTTPException(status_code=401, detail="Invalid session token")

    return AuthUser(
        id=session["user_id"],
        email=session["email"],
        role=session["role"],
        token=token,
    )


async def verify_admin(user: AuthUser = Depends(verify_session)) -> AuthUser:
    """Verify that the caller is an admin."""
    if not user.is_admin:
        raise HTTPException(status_code=403, detail=ERROR_ADMIN_REQUIRED)
    return user


def get_user_cart(user: AuthUser = Depends(verify_session)) -> CartStore:
    """
    Cart store loaded for the caller.

    Sync on purpose: FastAPI runs it in the threadpool, so the blocking
    storage read stays off the event loop.
    """
    return CartStore(get_cart_storage(), user.id)
