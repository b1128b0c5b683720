"""Shared test fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from docnest.core.connection import StoreConfig
from models import Canvas, Person


@pytest.fixture
def memory_config() -> StoreConfig:
    """In-memory store config."""
    return StoreConfig(driver="memory")


@pytest.fixture
def sqlite_config() -> StoreConfig:
    """SQLite in-memory store config."""
    return StoreConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def stored_attributes() -> dict[str, Any]:
    """A person's stored attributes with two embedded addresses."""
    return {
        "_id": "person-1",
        "_type": "Person",
        "title": "Sir",
        "addresses": [
            {"_id": "street-1", "_type": "Address", "street": "Street 1", "state": "CA"},
            {"_id": "street-2", "street": "Street 2"},
        ],
    }


@pytest.fixture
def person(stored_attributes: dict[str, Any]) -> Person:
    """A persisted person wrapping ``stored_attributes``."""
    return Person.instantiate(stored_attributes)  # type: ignore[return-value]


@pytest.fixture
def person_collection(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Stub collection bound to Person; writes succeed."""
    collection = MagicMock()
    collection.persist_in_safe_mode = True
    collection.save.return_value = True
    monkeypatch.setattr(Person, "collection", collection)
    return collection


@pytest.fixture
def canvas_collection(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Stub collection bound to Canvas; writes succeed."""
    collection = MagicMock()
    collection.persist_in_safe_mode = True
    collection.save.return_value = True
    monkeypatch.setattr(Canvas, "collection", collection)
    return collection
