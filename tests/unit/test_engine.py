"""Unit tests for StoreConfig, StoreManager, Engine and Collection."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from docnest.adapters.memory import MemoryAdapter
from docnest.core.connection import StoreConfig, StoreManager
from docnest.core.engine import Collection, Engine
from docnest.core.enums import StoreBackend
from docnest.core.exceptions import AdapterError
from models import Canvas, Person


@pytest.fixture
def engine(memory_config: StoreConfig) -> Iterator[Engine]:
    engine = Engine.from_config(memory_config)
    yield engine
    engine.close()


class TestStoreConfig:
    def test_defaults(self) -> None:
        config = StoreConfig()
        assert config.driver == "memory"
        assert config.database == ":memory:"
        assert config.pool_size == 1
        assert config.persist_in_safe_mode is True

    def test_type_checked(self) -> None:
        with pytest.raises(PydanticValidationError):
            StoreConfig(pool_size="many")  # type: ignore[arg-type]


class TestStoreManager:
    def test_loads_adapter(self, memory_config: StoreConfig) -> None:
        assert isinstance(StoreManager(memory_config).adapter, MemoryAdapter)

    def test_driver_is_case_insensitive(self) -> None:
        assert isinstance(StoreManager(StoreConfig(driver="MEMORY")).adapter, MemoryAdapter)

    def test_drivers_follow_backends(self) -> None:
        for backend in StoreBackend:
            assert StoreManager(StoreConfig(driver=backend.value)).adapter is not None

    def test_unsupported_driver(self) -> None:
        with pytest.raises(AdapterError, match="Unsupported"):
            StoreManager(StoreConfig(driver="couch"))

    def test_connection_returned_to_pool(self, memory_config: StoreConfig) -> None:
        manager = StoreManager(memory_config)
        with manager.get_connection() as conn:
            assert conn is not None
            assert manager.initialize_pool() == []
        assert len(manager.initialize_pool()) == 1

    def test_extra_forwarded_to_sqlite_connect(self) -> None:
        config = StoreConfig(driver="sqlite", extra={"timeout": 2.5})
        with patch("docnest.adapters.sqlite.sqlite3.connect") as connect:
            StoreManager(config).initialize_pool()
        connect.assert_called_once_with(":memory:", timeout=2.5)

    def test_close_pool(self, memory_config: StoreConfig) -> None:
        manager = StoreManager(memory_config)
        manager.initialize_pool()
        manager.close_pool()
        manager.close_pool()
        assert manager._pool is None


class TestCollection:
    def test_save_and_find(self, engine: Engine) -> None:
        people = engine.collection("people")
        assert people.save({"_id": "p", "title": "Sir"}) is True
        assert people.find_one("p") == {"_id": "p", "title": "Sir"}
        assert people.find_one("missing") is None
        assert people.find_all() == [{"_id": "p", "title": "Sir"}]

    def test_stored_copy_is_detached(self, engine: Engine) -> None:
        people = engine.collection("people")
        attributes = {"_id": "p", "tags": ["a"]}
        people.save(attributes)
        attributes["tags"].append("b")
        assert people.find_one("p") == {"_id": "p", "tags": ["a"]}

    def test_remove(self, engine: Engine) -> None:
        people = engine.collection("people")
        people.save({"_id": "p"})
        assert people.remove("p") is True
        assert people.remove("p") is False

    def test_failed_write_returns_false(self, engine: Engine) -> None:
        assert engine.collection("people").save({"title": "no id"}) is False

    def test_unacknowledged_write_returns_false(self, engine: Engine) -> None:
        with patch.object(MemoryAdapter, "write", return_value=False):
            assert engine.collection("people").save({"_id": "p"}) is False

    def test_read_errors_wrapped(self, engine: Engine) -> None:
        with patch.object(MemoryAdapter, "find_all", side_effect=RuntimeError("boom")):
            with pytest.raises(AdapterError, match="boom"):
                engine.collection("people").find_all()

    def test_safe_mode_from_config(self) -> None:
        engine = Engine.from_config(StoreConfig(persist_in_safe_mode=False))
        assert engine.collection("x").persist_in_safe_mode is False

    def test_safe_flag_forwarded(self, engine: Engine) -> None:
        with patch.object(MemoryAdapter, "write", return_value=True) as write:
            engine.collection("people").save({"_id": "p"}, safe=False)
        assert write.call_args.args[-1] is False


class TestEngine:
    def test_collection_is_cached(self, engine: Engine) -> None:
        assert engine.collection("a") is engine.collection("a")
        assert isinstance(engine.collection("a"), Collection)

    def test_bind(self, engine: Engine, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Person, "collection", None)
        monkeypatch.setattr(Canvas, "collection", None)
        engine.bind(Person, Canvas)
        assert Person.collection.name == "people"
        assert Canvas.collection.name == "canvass"

    def test_bind_with_name(self, engine: Engine, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Canvas, "collection", None)
        engine.bind(Canvas, name="canvases")
        assert Canvas.collection.name == "canvases"

    def test_bind_name_needs_one_class(self, engine: Engine) -> None:
        with pytest.raises(ValueError):
            engine.bind(Person, Canvas, name="things")

    def test_root_save_through_engine(
        self, engine: Engine, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(Person, "collection", None)
        engine.bind(Person)
        person = Person(title="Sir")
        person.addresses.build({"street": "Madison Ave"})
        assert person.save() is True
        stored = engine.collection("people").find_one(person.id)
        assert stored["addresses"][0]["_id"] == "madison-ave"

    def test_close(self) -> None:
        manager = MagicMock()
        Engine(manager).close()
        manager.close_pool.assert_called_once_with()
