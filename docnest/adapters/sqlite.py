"""SQLite adapter - one JSON document per row, one table per collection."""

from __future__ import annotations

import json
import re
import sqlite3
from typing import Any

from docnest.core.connection import StoreConfig
from docnest.core.exceptions import AdapterError

_COLLECTION_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_CREATE_COLLECTION = """
CREATE TABLE IF NOT EXISTS "{name}" (
    seq  INTEGER PRIMARY KEY AUTOINCREMENT,
    id   TEXT NOT NULL UNIQUE,
    body TEXT NOT NULL
)
"""

_UPSERT = (
    'INSERT INTO "{name}" (id, body) VALUES (:id, :body) '
    "ON CONFLICT(id) DO UPDATE SET body = excluded.body"
)


def _table(connection: sqlite3.Connection, collection: str) -> str:
    """Validate a collection name and make sure its table exists."""
    if not _COLLECTION_PATTERN.match(collection):
        raise AdapterError(f"Invalid collection name: '{collection}'")
    connection.execute(_CREATE_COLLECTION.format(name=collection))
    return collection


class SqliteAdapter:
    """Document adapter over stdlib sqlite3."""

    def create_pool(self, config: StoreConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite."""
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            conn = sqlite3.connect(config.database, **config.extra)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[sqlite3.Connection]) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        if not pool:
            raise RuntimeError("No connections available in pool")
        return pool.pop()

    def release_connection(
        self, connection: sqlite3.Connection, pool: list[sqlite3.Connection]
    ) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[sqlite3.Connection]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def write(
        self,
        connection: sqlite3.Connection,
        collection: str,
        attributes: dict[str, Any],
        safe: bool = True,
    ) -> bool:
        """Upsert the whole document.

        In safe mode the write is acknowledged only if exactly one row was
        touched; otherwise it is committed without checking.
        """
        table = _table(connection, collection)
        cursor = connection.execute(
            _UPSERT.format(name=table),
            {"id": str(attributes["_id"]), "body": json.dumps(attributes)},
        )
        connection.commit()
        if not safe:
            return True
        return cursor.rowcount == 1

    def find_one(
        self, connection: sqlite3.Connection, collection: str, document_id: Any
    ) -> dict[str, Any] | None:
        table = _table(connection, collection)
        row = connection.execute(
            f'SELECT body FROM "{table}" WHERE id = :id', {"id": str(document_id)}
        ).fetchone()
        if row is None:
            return None
        return json.loads(row["body"])  # type: ignore[no-any-return]

    def find_all(self, connection: sqlite3.Connection, collection: str) -> list[dict[str, Any]]:
        table = _table(connection, collection)
        rows = connection.execute(f'SELECT body FROM "{table}" ORDER BY seq').fetchall()
        return [json.loads(row["body"]) for row in rows]

    def remove(self, connection: sqlite3.Connection, collection: str, document_id: Any) -> bool:
        table = _table(connection, collection)
        cursor = connection.execute(
            f'DELETE FROM "{table}" WHERE id = :id', {"id": str(document_id)}
        )
        connection.commit()
        return cursor.rowcount > 0
