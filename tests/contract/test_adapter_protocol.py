"""Contract tests: every adapter satisfies the StorageAdapter protocol."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from docnest.adapters.memory import MemoryAdapter
from docnest.adapters.protocol import StorageAdapter
from docnest.adapters.sqlite import SqliteAdapter
from docnest.core.connection import StoreConfig
from docnest.core.exceptions import AdapterError

ADAPTERS = [(MemoryAdapter, "memory"), (SqliteAdapter, "sqlite")]
ADAPTER_IDS = ["memory", "sqlite"]


@pytest.fixture(params=ADAPTERS, ids=ADAPTER_IDS)
def adapter_and_conn(request: pytest.FixtureRequest) -> Iterator[tuple[Any, Any]]:
    adapter_cls, driver = request.param
    adapter = adapter_cls()
    pool = adapter.create_pool(StoreConfig(driver=driver))
    conn = adapter.acquire_connection(pool)
    yield adapter, conn
    adapter.release_connection(conn, pool)
    adapter.close_pool(pool)


@pytest.mark.parametrize(("adapter_cls", "driver"), ADAPTERS, ids=ADAPTER_IDS)
class TestAdapterLifecycle:
    def test_implements_protocol(self, adapter_cls: type, driver: str) -> None:
        assert isinstance(adapter_cls(), StorageAdapter)

    def test_pool_acquire_release(self, adapter_cls: type, driver: str) -> None:
        adapter = adapter_cls()
        pool = adapter.create_pool(StoreConfig(driver=driver, pool_size=2))
        assert len(pool) == 2
        conn = adapter.acquire_connection(pool)
        assert len(pool) == 1
        adapter.release_connection(conn, pool)
        assert len(pool) == 2
        adapter.close_pool(pool)
        assert pool == []

    def test_empty_pool(self, adapter_cls: type, driver: str) -> None:
        with pytest.raises(RuntimeError):
            adapter_cls().acquire_connection([])


class TestAdapterBehaviour:
    def test_write_then_read(self, adapter_and_conn: tuple[Any, Any]) -> None:
        adapter, conn = adapter_and_conn
        document = {"_id": "p", "title": "Sir", "addresses": [{"_id": "a", "street": "A"}]}
        assert adapter.write(conn, "people", document) is True
        assert adapter.find_one(conn, "people", "p") == document

    def test_write_replaces(self, adapter_and_conn: tuple[Any, Any]) -> None:
        adapter, conn = adapter_and_conn
        adapter.write(conn, "people", {"_id": "p", "title": "Sir"})
        assert adapter.write(conn, "people", {"_id": "p", "title": "Dame"}) is True
        assert adapter.find_all(conn, "people") == [{"_id": "p", "title": "Dame"}]

    def test_find_all_in_insertion_order(self, adapter_and_conn: tuple[Any, Any]) -> None:
        adapter, conn = adapter_and_conn
        for doc_id in ("c", "a", "b"):
            adapter.write(conn, "people", {"_id": doc_id})
        assert [doc["_id"] for doc in adapter.find_all(conn, "people")] == ["c", "a", "b"]

    def test_collections_are_separate(self, adapter_and_conn: tuple[Any, Any]) -> None:
        adapter, conn = adapter_and_conn
        adapter.write(conn, "people", {"_id": "p"})
        assert adapter.find_all(conn, "canvases") == []
        assert adapter.find_one(conn, "canvases", "p") is None

    def test_unsafe_write(self, adapter_and_conn: tuple[Any, Any]) -> None:
        adapter, conn = adapter_and_conn
        assert adapter.write(conn, "people", {"_id": "p"}, safe=False) is True

    def test_remove(self, adapter_and_conn: tuple[Any, Any]) -> None:
        adapter, conn = adapter_and_conn
        adapter.write(conn, "people", {"_id": "p"})
        assert adapter.remove(conn, "people", "p") is True
        assert adapter.remove(conn, "people", "p") is False


class TestSqliteSpecifics:
    def test_rejects_invalid_collection_name(self) -> None:
        adapter = SqliteAdapter()
        pool = adapter.create_pool(StoreConfig(driver="sqlite"))
        conn = adapter.acquire_connection(pool)
        try:
            with pytest.raises(AdapterError, match="Invalid collection"):
                adapter.write(conn, 'people"; DROP TABLE x; --', {"_id": "p"})
        finally:
            adapter.release_connection(conn, pool)
            adapter.close_pool(pool)
