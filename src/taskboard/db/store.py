"""MongoDB connection handling and the transaction boundary."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession, AsyncIOMotorDatabase

from ..core.config import Settings
from ..models import DOCUMENT_MODELS

logger = logging.getLogger(__name__)


class DocumentStore:
    """Own the Motor client and bind the Beanie documents to its database.

    One instance is created at application startup and shared by every
    request through ``app.state``. Multi-document writes go through
    :meth:`transaction`, which opens a MongoDB transaction when the
    deployment supports it (replica set) and is a no-op otherwise.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        database_name: str,
        *,
        transactions: bool = False,
    ) -> None:
        self._client = client
        self._database: AsyncIOMotorDatabase = client[database_name]
        self._transactions = transactions
        self._initialized = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        """Build a store with a Motor client configured from ``settings``."""

        timeout = settings.mongo_timeout_ms
        client = AsyncIOMotorClient(
            settings.mongo_url,
            tz_aware=True,
            uuidRepresentation="standard",
            serverSelectionTimeoutMS=timeout,
            connectTimeoutMS=timeout,
            socketTimeoutMS=timeout,
        )
        return cls(client, settings.mongo_database, transactions=settings.mongo_transactions)

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._database

    @property
    def transactions_enabled(self) -> bool:
        return self._transactions

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Register document models with Beanie and ensure their indexes."""

        if self._initialized:
            return
        await init_beanie(
            database=self._database,
            document_models=list(DOCUMENT_MODELS),
            allow_index_dropping=True,
        )
        self._initialized = True
        logger.info(
            "Document store initialised",
            extra={"database": self._database.name, "transactions": self._transactions},
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncIOMotorClientSession | None]:
        """Yield a session bound to an open transaction, or ``None``.

        Leaving the block normally commits; an exception aborts every write
        made through the yielded session.
        """

        if not self._transactions:
            yield None
            return
        async with await self._client.start_session() as session:
            async with session.start_transaction():
                yield session

    def close(self) -> None:
        """Dispose the underlying Motor client."""

        self._client.close()
        self._initialized = False


async def open_document_store(settings: Settings) -> DocumentStore:
    """Create and initialise the store described by ``settings``."""

    store = DocumentStore.from_settings(settings)
    await store.initialize()
    return store


__all__ = ["DocumentStore", "open_document_store"]
