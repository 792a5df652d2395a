"""
MongoDB store handle.

The store is opened once when the application starts and closed when it
stops; repositories are cheap wrappers built from it per request.

Mock mode keeps collections in memory, enabling API testing and local
development without a running MongoDB server.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

logger = logging.getLogger(__name__)


class StoreConnectionError(Exception):
    """Raised when the store cannot be reached."""
    pass


@dataclass
class MongoConfig:
    """Configuration for the MongoDB connection."""
    uri: str
    database: str
    max_pool_size: int = 50
    min_pool_size: int = 0
    server_selection_timeout_ms: int = 5000
    connect_timeout_ms: int = 10000
    socket_timeout_ms: int = 20000


class DocumentStore(Protocol):
    """
    Protocol for the store handle.

    Repositories only need collections; the application needs ping and
    close for readiness and shutdown.
    """

    def collection(self, name: str) -> Any: ...
    async def ping(self) -> None: ...
    def close(self) -> None: ...


class MongoStore:
    """Store handle backed by a motor client and its connection pool."""

    def __init__(self, config: MongoConfig) -> None:
        self._config = config
        # Motor connects lazily; no I/O happens here
        self._client = AsyncIOMotorClient(
            config.uri,
            maxPoolSize=config.max_pool_size,
            minPoolSize=config.min_pool_size,
            serverSelectionTimeoutMS=config.server_selection_timeout_ms,
            connectTimeoutMS=config.connect_timeout_ms,
            socketTimeoutMS=config.socket_timeout_ms,
        )
        self._database = self._client[config.database]

        logger.info(
            "Created MongoDB client",
            extra={"database": config.database},
        )

    @property
    def database(self):
        return self._database

    def collection(self, name: str) -> AsyncIOMotorCollection:
        return self._database[name]

    async def ping(self) -> None:
        """Round-trip to the server; raises StoreConnectionError if unreachable."""
        try:
            await self._client.admin.command("ping")
        except Exception as e:
            logger.error(
                "MongoDB ping failed",
                extra={"database": self._config.database, "error": str(e)},
            )
            raise StoreConnectionError(f"MongoDB unreachable: {e}") from e

    def close(self) -> None:
        self._client.close()
        logger.info("Closed MongoDB client")


# ---------------------------------------------------------------------------
# In-memory store for local development
# ---------------------------------------------------------------------------

@dataclass
class InsertManyResult:
    inserted_ids: list[Any]


@dataclass
class DeleteResult:
    deleted_count: int


def _value_matches(stored: Any, expected: Any) -> bool:
    """Equality, where an array field matches if it contains the value."""
    if isinstance(stored, list):
        return expected in stored
    return stored == expected


def _matches(document: dict, query: dict) -> bool:
    for field_name, condition in query.items():
        stored = document.get(field_name)

        if isinstance(condition, dict) and "$in" in condition:
            if not any(_value_matches(stored, value) for value in condition["$in"]):
                return False
        elif not _value_matches(stored, condition):
            return False

    return True


class InMemoryCursor:
    """Just enough of a motor cursor for `to_list`."""

    def __init__(self, documents: list[dict]) -> None:
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> list[dict]:
        if length is None:
            return list(self._documents)
        return self._documents[:length]


class InMemoryCollection:
    """
    Dictionary-backed collection.

    Supports the query shapes the repositories issue: empty filter,
    field equality (array fields match on containment) and `$in`.
    Documents are copied on the way in and out so callers cannot
    mutate stored state.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._documents: dict[Any, dict] = {}

    def find(self, query: Optional[dict] = None) -> InMemoryCursor:
        query = query or {}
        found = [
            copy.deepcopy(document)
            for document in self._documents.values()
            if _matches(document, query)
        ]
        return InMemoryCursor(found)

    async def find_one(self, query: Optional[dict] = None) -> Optional[dict]:
        documents = await self.find(query).to_list(length=1)
        return documents[0] if documents else None

    async def insert_many(self, documents: Iterable[dict]) -> InsertManyResult:
        inserted_ids = []
        for document in documents:
            stored = copy.deepcopy(document)
            stored.setdefault("_id", ObjectId())
            self._documents[stored["_id"]] = stored
            inserted_ids.append(stored["_id"])
        return InsertManyResult(inserted_ids=inserted_ids)

    async def insert_one(self, document: dict) -> Any:
        result = await self.insert_many([document])
        return result.inserted_ids[0]

    async def delete_many(self, query: Optional[dict] = None) -> DeleteResult:
        query = query or {}
        doomed = [key for key, document in self._documents.items() if _matches(document, query)]
        for key in doomed:
            del self._documents[key]
        return DeleteResult(deleted_count=len(doomed))


class InMemoryStore:
    """
    In-memory store for local development and tests.

    Not suitable for production: nothing is persisted.
    """

    def __init__(self) -> None:
        self._collections: dict[str, InMemoryCollection] = {}
        logger.info("Initialized in-memory document store")

    def collection(self, name: str) -> InMemoryCollection:
        if name not in self._collections:
            self._collections[name] = InMemoryCollection(name)
        return self._collections[name]

    async def ping(self) -> None:
        return None

    def close(self) -> None:
        self._collections.clear()


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_mongo_store(
    config: Optional[MongoConfig] = None,
    mock_mode: bool = False,
) -> DocumentStore:
    """
    Create the store handle based on configuration.

    Args:
        config: Mongo configuration (required if not mock_mode)
        mock_mode: If True, return an in-memory store

    Returns:
        DocumentStore implementation (MongoDB or in-memory)
    """
    if mock_mode:
        return InMemoryStore()

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return MongoStore(config)
