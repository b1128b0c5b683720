"""Store configuration and connection management.

StoreConfig is a Pydantic model for type-safe store config.
StoreManager uses the adapter protocol for pool-based connection lifecycle.
"""

from __future__ import annotations

import importlib
import logging
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel

from docnest.core.enums import StoreBackend
from docnest.core.exceptions import AdapterError

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Configuration for a document store."""

    driver: str = "memory"
    database: str = ":memory:"
    pool_size: int = 1
    persist_in_safe_mode: bool = True
    # Keyword arguments forwarded to the driver's connect call
    extra: dict[str, Any] = {}


# Adapter module mapping: backend → (module_path, class_name)
_ADAPTER_MAP: dict[StoreBackend, tuple[str, str]] = {
    StoreBackend.MEMORY: ("docnest.adapters.memory", "MemoryAdapter"),
    StoreBackend.SQLITE: ("docnest.adapters.sqlite", "SqliteAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load a storage adapter by driver name."""
    try:
        backend = StoreBackend(driver.lower())
    except ValueError:
        raise AdapterError(f"Unsupported storage driver: {driver}") from None

    module_path, cls_name = _ADAPTER_MAP[backend]
    try:
        module = importlib.import_module(module_path)
        adapter = getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e
    logger.debug("Loaded %s adapter for driver '%s'", cls_name, backend.value)
    return adapter


class StoreManager:
    """Connection manager using the StorageAdapter protocol."""

    def __init__(self, config: StoreConfig) -> None:
        self.config = config
        self._adapter = _load_adapter(config.driver)
        self._pool: Any = None

    @property
    def adapter(self) -> Any:
        return self._adapter

    def initialize_pool(self) -> Any:
        """Initialize the connection pool."""
        if self._pool is None:
            self._pool = self._adapter.create_pool(self.config)
        return self._pool

    @contextmanager
    def get_connection(self):  # type: ignore[no-untyped-def]
        """Get a connection from the pool as a context manager."""
        if self._pool is None:
            self.initialize_pool()
        connection = self._adapter.acquire_connection(self._pool)
        try:
            yield connection
        finally:
            self._adapter.release_connection(connection, self._pool)

    def close_pool(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            self._adapter.close_pool(self._pool)
            self._pool = None
