"""
Auth Router

Email/password registration and login issuing opaque session tokens.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import (
    AuthUser,
    create_web_session,
    hash_password,
    revoke_web_session,
    verify_password,
    verify_session,
)
from storefront.errors import ERROR_EMAIL_TAKEN, ERROR_INVALID_CREDENTIALS, ERROR_USER_NOT_FOUND
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from storefront.services.database import get_database
from .models import LoginRequest, RegisterRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(user) -> dict:
    token = create_web_session(user.id, user.email, user.role)
    return {"token": token, "user": user.public_dict()}


@router.post("/register", status_code=201)
async def register(request: RegisterRequest):
    """Create an account and log it in."""
    db = get_database()
    if await db.get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail=ERROR_EMAIL_TAKEN)

    user = await db.create_user(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
    )
    logger.info(f"Registered user {sanitize_id_for_logging(user.id)}")
    return _session_response(user)


@router.post("/login")
async def login(request: LoginRequest):
    db = get_database()
    user = await db.get_user_by_email(request.email)
    if not user or not verify_password(request.password, user.password_hash):
        logger.warning(f"Failed login for {sanitize_string_for_logging(request.email)}")
        raise HTTPException(status_code=401, detail=ERROR_INVALID_CREDENTIALS)
    return _session_response(user)


@router.post("/logout")
async def logout(user: AuthUser = Depends(verify_session)):
    """Revoke the caller's session. The persisted cart is kept for next login."""
    revoke_web_session(user.token)
    return {"success": True}


@router.get("/me")
async def me(user: AuthUser = Depends(verify_session)):
    db = get_database()
    db_user = await db.get_user_by_id(user.id)
    if not db_user:
        raise HTTPException(status_code=404, detail=ERROR_USER_NOT_FOUND)
    return db_user.public_dict()
