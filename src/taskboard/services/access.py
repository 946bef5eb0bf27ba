"""Ownership policy shared by every project and task operation."""

from __future__ import annotations

from typing import TypeVar

from beanie import PydanticObjectId
from bson import ObjectId

from ..errors import AuthorizationError, NotFoundError

ResourceType = TypeVar("ResourceType")


def parse_identifier(raw: str | PydanticObjectId, *, resource: str) -> PydanticObjectId:
    """Convert a client supplied identifier, treating malformed ids as unknown."""

    if isinstance(raw, ObjectId):
        return PydanticObjectId(raw)
    if not isinstance(raw, str) or not ObjectId.is_valid(raw):
        raise NotFoundError(f"{resource} not found.")
    return PydanticObjectId(raw)


def require_found(instance: ResourceType | None, *, resource: str) -> ResourceType:
    """Return ``instance`` or raise :class:`NotFoundError` when it is missing."""

    if instance is None:
        raise NotFoundError(f"{resource} not found.")
    return instance


def ensure_access(
    identity: PydanticObjectId,
    owner: PydanticObjectId,
    *,
    resource: str,
) -> None:
    """Allow the caller only when it is the user recorded on the resource.

    ``owner`` is the project's owner or the task's assignee. The resource has
    already been loaded by id at this point, so callers can tell a missing
    resource (404) from one that belongs to somebody else (403).
    """

    if str(identity) != str(owner):
        raise AuthorizationError(
            "Not authorized.",
            details={"resource": resource.lower()},
        )


__all__ = ["ensure_access", "parse_identifier", "require_found"]
