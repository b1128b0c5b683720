"""Document store engine.

The Engine hands out Collection handles over a StoreManager. A Collection
is what a root document writes itself through at the end of a save
cascade.
"""

from __future__ import annotations

import logging
from typing import Any

from docnest.core.connection import StoreConfig, StoreManager
from docnest.core.exceptions import AdapterError

logger = logging.getLogger(__name__)


class Collection:
    """Handle on one named collection of root documents."""

    def __init__(self, engine: Engine, name: str) -> None:
        self._engine = engine
        self.name = name

    @property
    def persist_in_safe_mode(self) -> bool:
        return self._engine.config.persist_in_safe_mode

    def save(self, attributes: dict[str, Any], safe: bool | None = None) -> bool:
        """Write a whole document.

        Returns False, never raises, when the adapter fails or does not
        acknowledge the write.
        """
        if safe is None:
            safe = self.persist_in_safe_mode
        manager = self._engine.manager
        with manager.get_connection() as conn:
            try:
                acknowledged = manager.adapter.write(conn, self.name, attributes, safe)
            except Exception as e:
                logger.warning(
                    "Write of %s into '%s' failed: %s", attributes.get("_id"), self.name, e
                )
                return False
        if not acknowledged:
            logger.warning(
                "Write of %s into '%s' was not acknowledged", attributes.get("_id"), self.name
            )
        return bool(acknowledged)

    def find_one(self, document_id: Any) -> dict[str, Any] | None:
        """Fetch one document's attributes. Returns None if absent."""
        manager = self._engine.manager
        with manager.get_connection() as conn:
            try:
                return manager.adapter.find_one(conn, self.name, document_id)  # type: ignore[no-any-return]
            except Exception as e:
                raise AdapterError(f"find_one on '{self.name}' failed: {e}") from e

    def find_all(self) -> list[dict[str, Any]]:
        """Fetch all documents' attributes."""
        manager = self._engine.manager
        with manager.get_connection() as conn:
            try:
                return manager.adapter.find_all(conn, self.name)  # type: ignore[no-any-return]
            except Exception as e:
                raise AdapterError(f"find_all on '{self.name}' failed: {e}") from e

    def remove(self, document_id: Any) -> bool:
        """Delete one document. Returns True if it existed."""
        manager = self._engine.manager
        with manager.get_connection() as conn:
            try:
                return bool(manager.adapter.remove(conn, self.name, document_id))
            except Exception as e:
                raise AdapterError(f"remove on '{self.name}' failed: {e}") from e

    def __repr__(self) -> str:
        return f"Collection({self.name!r})"


class Engine:
    """Synchronous document store engine."""

    def __init__(self, manager: StoreManager) -> None:
        self._manager = manager
        self._collections: dict[str, Collection] = {}

    @classmethod
    def from_config(cls, config: StoreConfig) -> Engine:
        """Create an Engine from a StoreConfig.

        Args:
            config: StoreConfig instance

        Returns:
            Engine instance
        """
        return cls(StoreManager(config))

    @property
    def manager(self) -> StoreManager:
        return self._manager

    @property
    def config(self) -> StoreConfig:
        return self._manager.config

    def collection(self, name: str) -> Collection:
        """Return the (cached) handle for collection *name*."""
        if name not in self._collections:
            self._collections[name] = Collection(self, name)
        return self._collections[name]

    def bind(self, *document_classes: type, name: str | None = None) -> None:
        """Bind root document classes to their collections.

        Args:
            document_classes: Document subclasses to bind.
            name: Collection name override; only valid with a single class.
        """
        if name is not None and len(document_classes) != 1:
            raise ValueError("A collection name override needs exactly one document class")
        for cls in document_classes:
            collection_name = name or cls.collection_name()  # type: ignore[attr-defined]
            cls.collection = self.collection(collection_name)  # type: ignore[attr-defined]
            logger.debug("Bound %s to collection '%s'", cls.__name__, collection_name)

    def close(self) -> None:
        self._manager.close_pool()
