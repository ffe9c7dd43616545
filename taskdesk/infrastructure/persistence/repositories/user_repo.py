"""User repository with password helpers. Interface methods return application DTOs."""

from __future__ import annotations

import asyncio

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.user import UserResult
from taskdesk.domain.enums import UserRole
from taskdesk.domain.exceptions import DuplicateRecordException
from taskdesk.infrastructure.persistence.models.user import User
from taskdesk.infrastructure.persistence.repositories.base import BaseRepository
from taskdesk.infrastructure.security.password import get_password_hash, verify_password

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        email=u.email,
        full_name=u.full_name,
        role=UserRole(u.role),
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Implements IUserRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await super().get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        user = await self._get_by_email(email)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        email: str,
        password: str,
        role: UserRole,
        full_name: str | None = None,
    ) -> UserResult:
        """Create user; raise DuplicateRecordException when the email is taken."""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            email=email.strip().lower(),
            full_name=full_name,
            role=UserRole(role).value,
            hashed_password=hashed,
            is_active=True,
        )
        try:
            async with self.db.begin_nested():
                created = await self.create(user)
        except IntegrityError:
            raise DuplicateRecordException(
                f"A user with email {user.email} already exists", "user"
            ) from None
        return _user_to_result(created)
