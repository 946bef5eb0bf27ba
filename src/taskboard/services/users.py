"""Service layer orchestrating user-related repository operations."""

from __future__ import annotations

from beanie import PydanticObjectId

from ..core.security import get_password_hash, verify_password
from ..models import User, UserRole
from ..repositories import UserRepository


def normalize_email(email: str) -> str:
    """Return the canonical form used to store and look up email addresses."""
    return email.strip().lower()


class UserService:
    """Credential store for ``User`` documents."""

    def __init__(self, repository: UserRepository | None = None) -> None:
        self._repository = repository or UserRepository()

    async def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Hash the password and persist a new user record."""
        user = User(
            name=name,
            email=normalize_email(email),
            hashed_password=get_password_hash(password),
            role=role,
        )
        return await self._repository.add(user)

    async def get_user(self, user_id: PydanticObjectId) -> User | None:
        """Fetch a user by identifier."""
        return await self._repository.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        """Fetch a user by their unique email address."""
        return await self._repository.get_by_email(normalize_email(email))

    @staticmethod
    def verify_password(user: User, password: str) -> bool:
        """Check ``password`` against the user's stored hash."""
        return verify_password(password, user.hashed_password)


__all__ = ["UserService", "normalize_email"]
