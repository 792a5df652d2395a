"""
Base repository over one MongoDB collection.

This module implements the repository pattern for document access.
The repository:
1. Translates between domain models and stored documents
2. Encapsulates all query shapes
3. Satisfies the read accessor the access resolver depends on

Application code never builds Mongo filters directly; it asks the
repository for what it needs in domain terms.
"""

import logging
from datetime import datetime
from typing import Any, Generic, Iterable, Optional, TypeVar

from bson import ObjectId
from pymongo.errors import PyMongoError

from ..client import DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Coerce an id to ObjectId, or None when it can't be one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def timestamps(document: dict) -> dict[str, datetime]:
    """Pick stored timestamps, leaving absent ones to the model defaults."""
    found = {}
    if document.get("createdAt") is not None:
        found["created_at"] = document["createdAt"]
    if document.get("updatedAt") is not None:
        found["updated_at"] = document["updatedAt"]
    return found


class MongoRepository(Generic[T]):
    """
    Read/write access to one collection.

    Subclasses set `collection_name` and implement the two translation
    hooks. Driver errors are logged and re-raised unchanged.
    """

    collection_name: str = ""

    def __init__(self, store: DocumentStore) -> None:
        self._collection = store.collection(self.collection_name)

    def _to_domain(self, document: dict) -> T:
        raise NotImplementedError

    def _to_document(self, record: T) -> dict:
        raise NotImplementedError

    async def _find(self, query: dict) -> list[T]:
        try:
            documents = await self._collection.find(query).to_list(length=None)
        except PyMongoError as e:
            logger.error(
                "Query failed",
                extra={
                    "collection": self.collection_name,
                    "query": str(query),
                    "error": str(e),
                },
            )
            raise

        return [self._to_domain(document) for document in documents]

    async def find_all(self) -> list[T]:
        return await self._find({})

    async def find_where(self, field_name: str, value: Any) -> list[T]:
        return await self._find({field_name: value})

    async def find_where_in(self, field_name: str, values: Iterable[Any]) -> list[T]:
        return await self._find({field_name: {"$in": list(values)}})

    async def find_by_id(self, resource_id: Any) -> Optional[T]:
        """
        Load one record.

        A string that isn't a valid ObjectId can't name a stored record,
        so it is reported as absent.
        """
        object_id = to_object_id(resource_id)
        if object_id is None:
            return None

        try:
            document = await self._collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(
                "Lookup by id failed",
                extra={
                    "collection": self.collection_name,
                    "id": str(object_id),
                    "error": str(e),
                },
            )
            raise

        if document is None:
            return None
        return self._to_domain(document)

    async def insert_many(self, records: Iterable[T]) -> list[T]:
        """Insert records, returning them with their stored ids."""
        documents = [self._to_document(record) for record in records]
        if not documents:
            return []

        result = await self._collection.insert_many(documents)
        for document, inserted_id in zip(documents, result.inserted_ids):
            document["_id"] = inserted_id

        logger.info(
            "Inserted documents",
            extra={"collection": self.collection_name, "count": len(documents)},
        )
        return [self._to_domain(document) for document in documents]

    async def delete_all(self) -> int:
        result = await self._collection.delete_many({})
        return result.deleted_count
