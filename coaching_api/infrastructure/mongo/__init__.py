"""
MongoDB persistence.

`client` owns the store handle (motor or in-memory); `repositories`
translate documents into domain models.
"""

from .client import (
    DocumentStore,
    InMemoryStore,
    MongoConfig,
    MongoStore,
    StoreConnectionError,
    create_mongo_store,
)

__all__ = [
    "DocumentStore",
    "InMemoryStore",
    "MongoConfig",
    "MongoStore",
    "StoreConnectionError",
    "create_mongo_store",
]
