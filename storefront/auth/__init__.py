"""Authentication package."""
from .session import create_web_session, revoke_web_session, revoke_user_sessions, verify_web_session_token
from .passwords import hash_password, verify_password
from .dependencies import AuthUser, get_user_cart, verify_admin, verify_session

__all__ = [
    "AuthUser",
    "create_web_session",
    "get_user_cart",
    "hash_password",
    "revoke_user_sessions",
    "revoke_web_session",
    "verify_admin",
    "verify_password",
    "verify_session",
    "verify_web_session_token",
]
