"""
Products Router

Catalog browsing for signed-in users, catalog management for admins.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import AuthUser, verify_admin, verify_session
from storefront.errors import ERROR_PRODUCT_NOT_FOUND
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.database import get_database
from .models import ProductCreateRequest, ProductUpdateRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    user: AuthUser = Depends(verify_session),
):
    db = get_database()
    products = await db.get_products(category=category, search=search)
    return [p.model_dump(mode="json") for p in products]


@router.get("/{product_id}")
async def get_product(product_id: str, user: AuthUser = Depends(verify_session)):
    db = get_database()
    product = await db.get_product_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return product.model_dump(mode="json")


@router.post("", status_code=201)
async def create_product(request: ProductCreateRequest, admin: AuthUser = Depends(verify_admin)):
    db = get_database()
    product = await db.create_product(request.model_dump(mode="json"))
    logger.info(f"Product {sanitize_id_for_logging(product.id)} created by {sanitize_id_for_logging(admin.id)}")
    return product.model_dump(mode="json")


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    admin: AuthUser = Depends(verify_admin),
):
    """Partial update; omitted fields are left as they are."""
    data = request.model_dump(mode="json", exclude_unset=True)
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")

    db = get_database()
    product = await db.update_product(product_id, data)
    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return product.model_dump(mode="json")


@router.delete("/{product_id}")
async def delete_product(product_id: str, admin: AuthUser = Depends(verify_admin)):
    db = get_database()
    if not await db.delete_product(product_id):
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    logger.info(f"Product {sanitize_id_for_logging(product_id)} deleted by {sanitize_id_for_logging(admin.id)}")
    return {"success": True}
