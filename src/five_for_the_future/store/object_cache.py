"""Grouped object cache, modelled on the WordPress object cache API."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable


class ObjectCacheStore:
    """
    SQLite store for cached values keyed by (group, key).

    Keys in ordinary groups are prefixed with the blog ID, so each site has its own copy.
    Groups registered with add_global_groups() are shared by every site on the network.
    """

    def __init__(self, db_path: str | Path = "five_for_the_future.db", blog_id: int = 1):
        self._db_path = Path(db_path)
        self._blog_id = blog_id
        self._global_groups: set[str] = set()
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def add_global_groups(self, groups: str | Iterable[str]) -> None:
        """Mark groups as shared across blogs."""
        if isinstance(groups, str):
            groups = [groups]
        self._global_groups.update(groups)

    def is_global_group(self, group: str) -> bool:
        return group in self._global_groups

    def build_key(self, key: str | int, group: str = "default") -> str:
        if self.is_global_group(group):
            return str(key)
        return f"{self._blog_id}:{key}"

    def get(self, key: str | int, group: str = "default") -> Any | None:
        """Cached value, or None when missing."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT value FROM object_cache WHERE cache_group = ? AND cache_key = ?",
                (group, self.build_key(key, group)),
            ).fetchone()
        if not row:
            return None
        return json.loads(row["value"])

    def set(self, key: str | int, value: Any, group: str = "default") -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO object_cache (cache_group, cache_key, value, stored_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(cache_group, cache_key) DO UPDATE SET
                    value = excluded.value,
                    stored_at = excluded.stored_at
                """,
                (group, self.build_key(key, group), json.dumps(value, default=str), now),
            )
            conn.commit()

    def delete(self, key: str | int, group: str = "default") -> bool:
        """Delete one key. Returns True if it existed."""
        return self.delete_multiple([key], group)[str(key)]

    def delete_multiple(self, keys: Iterable[str | int], group: str = "default") -> dict[str, bool]:
        """Delete several keys from a group. Returns {key: existed}."""
        results: dict[str, bool] = {}
        with self._connection() as conn:
            for key in keys:
                cursor = conn.execute(
                    "DELETE FROM object_cache WHERE cache_group = ? AND cache_key = ?",
                    (group, self.build_key(key, group)),
                )
                results[str(key)] = cursor.rowcount > 0
            conn.commit()
        return results
