from typing import Optional
import logging

import bcrypt

from hostel_ops.core import ValidationError, NotFoundError
from hostel_ops.roles import Role
from hostel_ops.state import Record
from .collections import CollectionService

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


class UserService(CollectionService):
    """Login accounts. Every rule here is checked before the store is touched."""

    async def create(self, record: Record) -> Record:
        record = dict(record)
        password = record.pop("password", None)
        username = self._check_username(record.get("username"))
        self._check_password(password, required=True)
        self._check_role(record.get("role"))

        if await self.repository.exists_by_username(username):
            raise ValidationError("Username already exists", field="username")

        record["username"] = username
        record.setdefault("isActive", True)
        row = self.spec.fields.to_row(record)
        row["password_hash"] = hash_password(password)
        saved = await self.insert_row(row, action="add user")
        logger.info("Created user %s (%s)", username, saved.get("role"))
        return saved

    async def update(self, record_id: str, record: Record) -> Record:
        record = dict(record)
        password = record.pop("password", None)
        username = self._check_username(record.get("username"))
        self._check_password(password, required=False)
        self._check_role(record.get("role"))

        current = await self.repository.get(record_id)
        if current is None:
            raise NotFoundError(self.spec.entity, record_id)
        if await self.repository.exists_by_username(username, exclude_id=record_id):
            raise ValidationError("Username already exists", field="username")

        keeps_admin = record.get("role") == Role.admin.value and record.get("isActive", True)
        if self._is_active_admin(current) and not keeps_admin:
            if await self.repository.count_active_admins() <= 1:
                raise ValidationError("Cannot demote or deactivate the last active admin", field="role")

        record["username"] = username
        record.setdefault("isActive", current.is_active)
        row = self.spec.fields.to_row(record)
        row.pop("id", None)
        row.pop("created_at", None)
        if password:
            row["password_hash"] = hash_password(password)
        return await self.replace_row(record_id, row, action="update user")

    async def before_delete(self, record_id: str, *, actor_id: Optional[str] = None) -> None:
        if actor_id is not None and actor_id == record_id:
            raise ValidationError("You cannot delete your own account")

        user = await self.repository.get(record_id)
        if user is None:
            raise NotFoundError(self.spec.entity, record_id)
        if self._is_active_admin(user) and await self.repository.count_active_admins() <= 1:
            raise ValidationError("Cannot delete the last active admin")

    @staticmethod
    def _is_active_admin(user) -> bool:
        return user.role == Role.admin.value and bool(user.is_active)

    @staticmethod
    def _check_username(username: Optional[str]) -> str:
        username = (username or "").strip()
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(
                f"Username must be at least {MIN_USERNAME_LENGTH} characters", field="username"
            )
        return username

    @staticmethod
    def _check_password(password: Optional[str], *, required: bool) -> None:
        if not password:
            if required:
                raise ValidationError("Password is required", field="password")
            return
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
            )

    @staticmethod
    def _check_role(role: Optional[str]) -> None:
        valid_roles = [r.value for r in Role]
        if role not in valid_roles:
            raise ValidationError(f"Invalid role. Must be one of: {', '.join(valid_roles)}", field="role")
