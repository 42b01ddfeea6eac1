"""SQLite-backed access to the BuddyPress xprofile data table."""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from five_for_the_future.constants import XPROFILE_TABLE
from five_for_the_future.models.xprofile import RawRow
from five_for_the_future.serialization import serialize_value

logger = logging.getLogger(__name__)


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


class XProfileStore:
    """
    Reads and writes raw (user_id, field_id, value) rows.
    Values are returned exactly as stored; decoding is left to the caller.
    """

    def __init__(self, db_path: str | Path = "five_for_the_future.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    @staticmethod
    def _row_to_raw(row: sqlite3.Row) -> RawRow:
        return RawRow(user_id=row["user_id"], field_id=row["field_id"], value=row["value"] or "")

    def fetch_rows(self, user_ids: Iterable[int], field_ids: Iterable[int]) -> list[RawRow]:
        """Rows for the given users, restricted to the given fields."""
        users = [int(u) for u in user_ids]
        fields = [int(f) for f in field_ids]
        if not users or not fields:
            return []
        sql = (
            f"SELECT user_id, field_id, value FROM {XPROFILE_TABLE} "
            f"WHERE user_id IN ({_placeholders(len(users))}) "
            f"AND field_id IN ({_placeholders(len(fields))}) "
            "ORDER BY user_id, field_id"
        )
        with self._connection() as conn:
            rows = conn.execute(sql, (*users, *fields)).fetchall()
        logger.debug("Fetched %d xprofile rows for %d users", len(rows), len(users))
        return [self._row_to_raw(r) for r in rows]

    def fetch_rows_for_fields(self, field_ids: Iterable[int]) -> list[RawRow]:
        """Rows for every user, restricted to the given fields, ordered by user."""
        fields = [int(f) for f in field_ids]
        if not fields:
            return []
        sql = (
            f"SELECT user_id, field_id, value FROM {XPROFILE_TABLE} "
            f"WHERE field_id IN ({_placeholders(len(fields))}) "
            "ORDER BY user_id, field_id"
        )
        with self._connection() as conn:
            rows = conn.execute(sql, fields).fetchall()
        logger.debug("Fetched %d xprofile rows for fields %s", len(rows), fields)
        return [self._row_to_raw(r) for r in rows]

    def set_value(self, user_id: int, field_id: int, value: Any) -> None:
        """Insert or replace a user's value for a field. Lists are PHP-serialized."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                f"""
                INSERT INTO {XPROFILE_TABLE} (field_id, user_id, value, last_updated)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(field_id, user_id) DO UPDATE SET
                    value = excluded.value,
                    last_updated = excluded.last_updated
                """,
                (int(field_id), int(user_id), serialize_value(value), now),
            )
            conn.commit()

    def delete_rows(self, user_id: int, field_ids: Iterable[int]) -> int:
        """Delete a user's rows for the given fields. Returns the number of rows removed."""
        fields = [int(f) for f in field_ids]
        if not fields:
            return 0
        with self._connection() as conn:
            cursor = conn.execute(
                f"DELETE FROM {XPROFILE_TABLE} WHERE user_id = ? AND field_id IN ({_placeholders(len(fields))})",
                (int(user_id), *fields),
            )
            conn.commit()
            return cursor.rowcount
