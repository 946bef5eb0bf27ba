"""Base repository implementation over Beanie documents."""

from __future__ import annotations

from typing import Generic, TypeVar

from beanie import Document, PydanticObjectId
from motor.motor_asyncio import AsyncIOMotorClientSession

DocumentType = TypeVar("DocumentType", bound=Document)


class BaseRepository(Generic[DocumentType]):
    """Provide shared persistence helpers for repositories.

    Write helpers accept an optional Motor session so several of them can be
    grouped under one :meth:`DocumentStore.transaction` block.
    """

    def __init__(self, model_type: type[DocumentType]) -> None:
        self._model_type = model_type

    async def get(
        self,
        entity_id: PydanticObjectId,
        *,
        session: AsyncIOMotorClientSession | None = None,
    ) -> DocumentType | None:
        """Retrieve a document by its identifier."""
        return await self._model_type.get(entity_id, session=session)

    async def add(
        self,
        instance: DocumentType,
        *,
        session: AsyncIOMotorClientSession | None = None,
    ) -> DocumentType:
        """Insert a new document and return it with its identifier set."""
        await instance.insert(session=session)
        return instance

    async def save(
        self,
        instance: DocumentType,
        *,
        session: AsyncIOMotorClientSession | None = None,
    ) -> DocumentType:
        """Persist the current state of an existing document."""
        await instance.save(session=session)
        return instance

    async def delete(
        self,
        instance: DocumentType,
        *,
        session: AsyncIOMotorClientSession | None = None,
    ) -> None:
        """Delete a single document."""
        await instance.delete(session=session)
