"""Storage adapter protocol.

Every adapter module MUST implement this protocol. The save cascade only
ever calls ``write`` with a root document's full attribute tree; no
partial-document write is part of the contract.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from docnest.core.connection import StoreConfig


@runtime_checkable
class StorageAdapter(Protocol):
    """Synchronous document storage adapter protocol."""

    def create_pool(self, config: StoreConfig) -> Any:
        """Create a connection pool."""
        ...

    def acquire_connection(self, pool: Any) -> Any:
        """Acquire a connection from the pool."""
        ...

    def release_connection(self, connection: Any, pool: Any) -> None:
        """Release a connection back to the pool."""
        ...

    def close_pool(self, pool: Any) -> None:
        """Close the pool and release all connections."""
        ...

    def write(
        self,
        connection: Any,
        collection: str,
        attributes: dict[str, Any],
        safe: bool = True,
    ) -> bool:
        """Insert or replace a whole document. Returns True when acknowledged."""
        ...

    def find_one(self, connection: Any, collection: str, document_id: Any) -> dict[str, Any] | None:
        """Return the stored attributes of one document, or None."""
        ...

    def find_all(self, connection: Any, collection: str) -> list[dict[str, Any]]:
        """Return the stored attributes of every document in insertion order."""
        ...

    def remove(self, connection: Any, collection: str, document_id: Any) -> bool:
        """Delete one document. Returns True if a document was removed."""
        ...
