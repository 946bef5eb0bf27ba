"""Authentication service covering registration, login and bearer tokens."""

from __future__ import annotations

import logging

from beanie import PydanticObjectId
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import DuplicateKeyError

from ..core.config import Settings
from ..core.security import (
    ExpiredSignatureError,
    GeneratedToken,
    JWTError,
    TokenType,
    create_access_token,
    decode_token,
)
from ..errors import AuthenticationError, ValidationError
from ..models import User
from ..schemas.auth import TokenPayload
from .users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and the bearer token gate."""

    def __init__(self, settings: Settings, user_service: UserService | None = None) -> None:
        self._settings = settings
        self._user_service = user_service or UserService()

    async def register_user(self, *, name: str, email: str, password: str) -> User:
        """Create an account, refusing emails that are already registered."""
        existing = await self._user_service.get_user_by_email(email)
        if existing is not None:
            raise ValidationError("User already exists.", code="duplicate_email")
        try:
            user = await self._user_service.create_user(name=name, email=email, password=password)
        except DuplicateKeyError as exc:
            raise ValidationError("User already exists.", code="duplicate_email") from exc
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """Return the user for valid credentials, ``None`` otherwise."""
        user = await self._user_service.get_user_by_email(email)
        if user is None:
            return None
        if not self._user_service.verify_password(user, password):
            return None
        return user

    def issue_token(self, user: User) -> GeneratedToken:
        """Sign an access token identifying ``user``."""
        if user.id is None:
            raise ValidationError("User must be persisted before issuing tokens.")
        return create_access_token(
            subject=user.id,
            roles=[user.role.value],
            settings=self._settings,
        )

    def resolve_token(self, token: str | None) -> PydanticObjectId:
        """Map a bearer token back to the user id it was issued for."""
        if not token:
            raise AuthenticationError("Authentication token is missing.", code="token_missing")
        try:
            payload = decode_token(
                token=token,
                secret=self._settings.jwt_secret_key,
                algorithm=self._settings.jwt_algorithm,
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Authentication token has expired.", code="token_expired") from exc
        except JWTError as exc:
            raise AuthenticationError("Authentication token is invalid.", code="token_invalid") from exc

        try:
            token_payload = TokenPayload.model_validate(payload)
        except PydanticValidationError as exc:
            raise AuthenticationError("Authentication token is invalid.", code="token_invalid") from exc

        if token_payload.type is not TokenType.ACCESS or not ObjectId.is_valid(token_payload.sub):
            raise AuthenticationError("Authentication token is invalid.", code="token_invalid")
        return PydanticObjectId(token_payload.sub)

    async def get_current_user(self, token: str | None) -> User:
        """Resolve ``token`` and load the user it names."""
        user_id = self.resolve_token(token)
        user = await self._user_service.get_user(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists.", code="token_invalid")
        return user


__all__ = ["AuthService"]
