"""
Users Router

Admin-only user management.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import AuthUser, revoke_user_sessions, verify_admin
from storefront.cart import ROLE_ADMIN, ROLE_USER
from storefront.errors import ERROR_USER_NOT_FOUND
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.database import get_database
from .models import UpdateUserRoleRequest

logger = get_logger(__name__)

# Every route here requires an admin session
router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(verify_admin)])


@router.get("")
async def list_users():
    db = get_database()
    users = await db.get_users()
    return [u.public_dict() for u in users]


@router.get("/stats")
async def user_stats():
    db = get_database()
    return await db.get_user_stats()


@router.get("/{user_id}")
async def get_user(user_id: str):
    db = get_database()
    user = await db.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail=ERROR_USER_NOT_FOUND)
    return user.public_dict()


@router.put("/{user_id}/role")
async def update_user_role(
    user_id: str,
    request: UpdateUserRoleRequest,
    admin: AuthUser = Depends(verify_admin),
):
    """Change a user's role. Their sessions are revoked so the new role applies on next login."""
    if request.role not in (ROLE_USER, ROLE_ADMIN):
        raise HTTPException(status_code=400, detail="Role must be 'user' or 'admin'")
    if user_id == admin.id and request.role != ROLE_ADMIN:
        raise HTTPException(status_code=400, detail="Admins cannot demote themselves")

    db = get_database()
    user = await db.update_user_role(user_id, request.role)
    if not user:
        raise HTTPException(status_code=404, detail=ERROR_USER_NOT_FOUND)
    revoke_user_sessions(user_id)
    return user.public_dict()


@router.delete("/{user_id}")
async def delete_user(user_id: str, admin: AuthUser = Depends(verify_admin)):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="Admins cannot delete themselves")

    db = get_database()
    if not await db.delete_user(user_id):
        raise HTTPException(status_code=404, detail=ERROR_USER_NOT_FOUND)
    revoke_user_sessions(user_id)
    logger.info(f"User {sanitize_id_for_logging(user_id)} deleted by {sanitize_id_for_logging(admin.id)}")
    return {"success": True}
