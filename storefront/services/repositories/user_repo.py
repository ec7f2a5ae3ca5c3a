"""User Repository - Account and role operations."""

from datetime import UTC, datetime

from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.models import User

from .base import BaseRepository

logger = get_logger(__name__)


class UserRepository(BaseRepository):
    """User database operations."""

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self.client.table("users").select("*").eq("id", user_id).execute()
        return User(**result.data[0]) if result.data else None

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (stored lowercased)."""
        result = (
            await self.client.table("users").select("*").eq("email", email.lower()).execute()
        )
        return User(**result.data[0]) if result.data else None

    async def create(self, name: str, email: str, password_hash: str, role: str = "user") -> User:
        data = {
            "name": name,
            "email": email.lower(),
            "password_hash": password_hash,
            "role": role,
            "created_at": datetime.now(UTC).isoformat(),
        }
        result = await self.client.table("users").insert(data).execute()
        return User(**result.data[0])

    async def get_all(self) -> list[User]:
        result = (
            await self.client.table("users").select("*").order("created_at", desc=True).execute()
        )
        return [User(**u) for u in result.data]

    async def update_role(self, user_id: str, role: str) -> User | None:
        result = await self.client.table("users").update({"role": role}).eq("id", user_id).execute()
        if not result.data:
            return None
        logger.info(f"User {sanitize_id_for_logging(user_id)} role set to {role}")
        return User(**result.data[0])

    async def delete(self, user_id: str) -> bool:
        result = await self.client.table("users").delete().eq("id", user_id).execute()
        return bool(result.data)

    async def count_by_role(self) -> dict[str, int]:
        """Count users per role."""
        result = await self.client.table("users").select("role").execute()
        counts: dict[str, int] = {"user": 0, "admin": 0}
        for row in result.data:
            role = row.get("role") or "user"
            counts[role] = counts.get(role, 0) + 1
        return counts
