"""Order Repository - Order operations."""
from datetime import UTC, datetime
from decimal import Decimal
from typing import List, Optional

from storefront.services.models import Order, OrderItem

from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Order database operations.

    Order lines are stored inline as a JSON column; prices go over the
    wire as strings to keep them exact.
    """

    async def create(
        self,
        user_id: str,
        items: List[OrderItem],
        total_price: Decimal,
        shipping_address: Optional[str] = None,
    ) -> Order:
        data = {
            "user_id": user_id,
            "items": [item.model_dump(mode="json") for item in items],
            "total_price": str(total_price),
            "status": "pending",
            "shipping_address": shipping_address,
            "created_at": datetime.now(UTC).isoformat(),
        }
        result = await self.client.table("orders").insert(data).execute()
        return Order(**result.data[0])

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self.client.table("orders").select("*").eq("id", order_id).execute()
        return Order(**result.data[0]) if result.data else None

    async def get_by_user(self, user_id: str, limit: int = 50) -> List[Order]:
        """Get user's orders, newest first."""
        result = await (
            self.client.table("orders")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Order(**o) for o in result.data]

    async def get_all(self, status: Optional[str] = None, limit: int = 100) -> List[Order]:
        query = self.client.table("orders").select("*")
        if status:
            query = query.eq("status", status)
        result = await query.order("created_at", desc=True).limit(limit).execute()
        return [Order(**o) for o in result.data]

    async def update_status(self, order_id: str, status: str) -> Optional[Order]:
        result = await self.client.table("orders").update({"status": status}).eq("id", order_id).execute()
        return Order(**result.data[0]) if result.data else None

    async def delete(self, order_id: str) -> bool:
        result = await self.client.table("orders").delete().eq("id", order_id).execute()
        return bool(result.data)
