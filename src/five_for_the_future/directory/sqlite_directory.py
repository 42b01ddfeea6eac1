"""Contributor directory backed by local contributor_posts and users tables."""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from five_for_the_future.constants import PUBLISHED
from five_for_the_future.directory.base import ContributorDirectory
from five_for_the_future.models.contributor import ContributorPost, ContributorUser


class SqliteContributorDirectory(ContributorDirectory):
    """SQLite store for contributor posts and the users they refer to."""

    backend_id = "sqlite"

    def __init__(self, db_path: str | Path = "five_for_the_future.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent.parent / "store" / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def add_user(self, user_id: int, user_login: str) -> ContributorUser:
        with self._connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO users (ID, user_login) VALUES (?, ?)",
                (user_id, user_login),
            )
            conn.commit()
        return ContributorUser(id=user_id, user_login=user_login)

    def add_contributor(self, pledge_id: int, user_login: str, status: str = "pending") -> ContributorPost:
        """Link a user login to a pledge."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO contributor_posts (pledge_id, post_title, post_status, created_at) VALUES (?, ?, ?, ?)",
                (pledge_id, user_login, status, now),
            )
            conn.commit()
            post_id = cursor.lastrowid or 0
        return ContributorPost(id=post_id, pledge_id=pledge_id, post_title=user_login, post_status=status)

    def set_contributor_status(self, post_id: int, status: str) -> None:
        with self._connection() as conn:
            conn.execute("UPDATE contributor_posts SET post_status = ? WHERE id = ?", (status, post_id))
            conn.commit()

    def get_pledge_contributors(self, pledge_id: int, status: str = PUBLISHED) -> list[ContributorPost]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM contributor_posts WHERE pledge_id = ? AND post_status = ? ORDER BY post_title",
                (pledge_id, status),
            ).fetchall()
        return [
            ContributorPost(
                id=r["id"],
                pledge_id=r["pledge_id"],
                post_title=r["post_title"],
                post_status=r["post_status"],
            )
            for r in rows
        ]

    def get_contributor_user_objects(self, posts: list[ContributorPost]) -> list[ContributorUser]:
        logins = [p.post_title for p in posts]
        if not logins:
            return []
        placeholders = ", ".join("?" for _ in logins)
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT ID, user_login FROM users WHERE user_login IN ({placeholders})",
                logins,
            ).fetchall()
        by_login = {r["user_login"]: ContributorUser(id=r["ID"], user_login=r["user_login"]) for r in rows}
        return [by_login[login] for login in logins if login in by_login]
