"""Product Repository - Product catalog operations."""
from typing import Any, Dict, List, Optional

from storefront.services.models import Product

from .base import BaseRepository


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_all(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
        """List products, newest first, optionally filtered by category or name."""
        query = self.client.table("products").select("*")
        if category:
            query = query.eq("category", category)
        if search:
            query = query.ilike("name", f"%{search}%")
        result = await query.order("created_at", desc=True).execute()
        return [Product(**p) for p in result.data]

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        result = await self.client.table("products").select("*").eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def create(self, data: Dict[str, Any]) -> Product:
        result = await self.client.table("products").insert(data).execute()
        return Product(**result.data[0])

    async def update(self, product_id: str, data: Dict[str, Any]) -> Optional[Product]:
        result = await self.client.table("products").update(data).eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def delete(self, product_id: str) -> bool:
        result = await self.client.table("products").delete().eq("id", product_id).execute()
        return bool(result.data)
