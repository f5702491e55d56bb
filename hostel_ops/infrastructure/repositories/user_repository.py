from typing import Optional, Dict, Any
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from hostel_ops.core import BaseRepository
from hostel_ops.models import User
from hostel_ops.roles import Role


class UserRepository(BaseRepository[User]):
    """User repository implementation"""

    protected_columns = ("id", "created_at", "password_hash")

    def __init__(self, session: AsyncSession):
        super().__init__(User, session, order_by=(User.username,))

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        query = select(User).where(User.username == username)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def exists_by_username(self, username: str, *, exclude_id: Optional[str] = None) -> bool:
        """Check if another user already has *username*"""
        query = select(User.id).where(User.username == username)
        if exclude_id:
            query = query.where(User.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar() is not None

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar() or 0

    async def count_active_admins(self) -> int:
        query = (
            select(func.count())
            .select_from(User)
            .where(User.role == Role.admin.value, User.is_active.is_(True))
        )
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def replace(self, *, id: Any, obj_in: Dict[str, Any]) -> Optional[User]:
        """Full replace; the password hash only changes when a new one is given"""
        user = await super().replace(id=id, obj_in=obj_in)
        if user and obj_in.get("password_hash"):
            user.password_hash = obj_in["password_hash"]
            await self.session.flush()
        return user

    def to_row(self, db_obj: User) -> Dict[str, Any]:
        row = super().to_row(db_obj)
        row.pop("password_hash", None)
        return row
