"""In-process memory adapter.

Documents are deep-copied on the way in and out so callers never share
state with the store, the same as a serializing backend.
"""

from __future__ import annotations

import copy
from typing import Any

from docnest.core.connection import StoreConfig


class MemoryDatabase:
    """Collections of documents keyed by ``_id``."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[Any, dict[str, Any]]] = {}

    def collection(self, name: str) -> dict[Any, dict[str, Any]]:
        return self.collections.setdefault(name, {})


class MemoryAdapter:
    """Adapter storing documents in a ``MemoryDatabase``.

    Every connection of a pool shares one database.
    """

    def create_pool(self, config: StoreConfig) -> list[MemoryDatabase]:
        """Create a 'pool' of handles onto one shared database."""
        database = MemoryDatabase()
        return [database for _ in range(config.pool_size)]

    def acquire_connection(self, pool: list[MemoryDatabase]) -> MemoryDatabase:
        """Acquire a connection from the pool."""
        if not pool:
            raise RuntimeError("No connections available in pool")
        return pool.pop()

    def release_connection(self, connection: MemoryDatabase, pool: list[MemoryDatabase]) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[MemoryDatabase]) -> None:
        pool.clear()

    def write(
        self,
        connection: MemoryDatabase,
        collection: str,
        attributes: dict[str, Any],
        safe: bool = True,
    ) -> bool:
        """Store a deep copy of *attributes* under its ``_id``."""
        document_id = attributes.get("_id")
        if document_id is None:
            raise ValueError("Cannot write a document without an '_id'")
        connection.collection(collection)[document_id] = copy.deepcopy(attributes)
        return True

    def find_one(
        self, connection: MemoryDatabase, collection: str, document_id: Any
    ) -> dict[str, Any] | None:
        stored = connection.collection(collection).get(document_id)
        if stored is None:
            return None
        return copy.deepcopy(stored)

    def find_all(self, connection: MemoryDatabase, collection: str) -> list[dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in connection.collection(collection).values()]

    def remove(self, connection: MemoryDatabase, collection: str, document_id: Any) -> bool:
        return connection.collection(collection).pop(document_id, None) is not None
