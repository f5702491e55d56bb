from typing import Optional, Tuple
import logging

from hostel_ops.casing import USER_FIELDS
from hostel_ops.core import AuthenticationError, BaseService, NotFoundError
from hostel_ops.infrastructure.repositories import UserRepository
from hostel_ops.roles import Role
from hostel_ops.security import decode_token, mint_tokens
from hostel_ops.state import Record
from .user_service import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """Authentication against the users table"""

    def __init__(self, session, user_repo: Optional[UserRepository] = None):
        super().__init__(session)
        self.user_repo = user_repo or UserRepository(session)

    async def authenticate_user(self, username: str, password: str) -> Tuple[Record, str, str]:
        """Authenticate user with username and password"""
        user = await self.user_repo.get_by_username((username or "").strip())
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login for %r", username)
            raise AuthenticationError("Invalid username or password")

        if not user.is_active:
            raise AuthenticationError("Account is disabled")

        access_token, refresh_token = mint_tokens(
            sub=user.id,
            role=user.role,
            username=user.username,
        )
        return self._record(user), access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str) -> str:
        """Generate new access token from refresh token"""
        payload = decode_token(refresh_token)
        if payload.get("typ") != "refresh":
            raise AuthenticationError("Invalid refresh token")

        user = await self.user_repo.get(payload.get("sub"))
        if not user or not user.is_active:
            raise AuthenticationError("Invalid refresh token")

        access, _ = mint_tokens(sub=user.id, role=user.role, username=user.username)
        return access

    async def get_current_user(self, user_id: str) -> Record:
        user = await self.user_repo.get(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        if not user.is_active:
            raise AuthenticationError("Account is disabled")
        return self._record(user)

    async def ensure_default_users(
        self,
        admin_username: str,
        admin_password: str,
        staff_username: str = "",
        staff_password: str = "",
    ) -> bool:
        """Seed an administrator (and optionally a staff login) when nobody can log in yet.

        Returns True when the accounts were seeded.
        """
        if await self.user_repo.count() > 0:
            return False

        accounts = [(admin_username, admin_password, Role.admin)]
        if staff_username and staff_password:
            accounts.append((staff_username, staff_password, Role.staff))

        for username, password, role in accounts:
            await self.user_repo.insert(obj_in={
                "username": username,
                "password_hash": hash_password(password),
                "role": role.value,
                "is_active": True,
            })
        await self.session.commit()
        for username, _, role in accounts:
            logger.warning("Seeded default %s account %r; change its password", role.value, username)
        return True

    def _record(self, user) -> Record:
        return USER_FIELDS.to_record(self.user_repo.to_row(user))
