from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Protocol

from psycopg2.extras import RealDictCursor

"""User stores for the authentication API.

InMemoryUserStore backs tests and the DB-less mode; PostgresUserStore keeps
users in a ``users`` table. Emails are unique in both.
"""

__all__ = [
    "InMemoryUserStore",
    "PostgresUserStore",
    "User",
    "UserStore",
]


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    password_hash: str

    def public(self) -> dict[str, str]:
        """Fields safe to return to clients (never the hash)."""
        return {"id": self.id, "name": self.name, "email": self.email}


class UserStore(Protocol):
    def find_by_email(self, email: str) -> User | None:
        ...

    def create(self, name: str, email: str, password_hash: str) -> User:
        ...


class InMemoryUserStore:
    def __init__(self) -> None:
        self._by_email: dict[str, User] = {}

    def find_by_email(self, email: str) -> User | None:
        return self._by_email.get(email)

    def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(id=uuid.uuid4().hex, name=name, email=email, password_hash=password_hash)
        self._by_email[email] = user
        return user

    def __len__(self) -> int:
        return len(self._by_email)


_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    email VARCHAR(255) UNIQUE NOT NULL,
    password_hash VARCHAR(255) NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


class PostgresUserStore:
    """psycopg2-backed store. Each write commits its own transaction."""

    def __init__(self, connection: Any) -> None:
        self._conn = connection

    def ensure_schema(self) -> None:
        with self._conn.cursor() as cur:
            cur.execute(_CREATE_TABLE_SQL)
        self._conn.commit()

    @staticmethod
    def _to_user(row: dict[str, Any]) -> User:
        return User(
            id=str(row["id"]),
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
        )

    def find_by_email(self, email: str) -> User | None:
        with self._conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                "SELECT id, name, email, password_hash FROM users WHERE email = %s",
                (email,),
            )
            row = cur.fetchone()
        # read-only statement; end the implicit transaction
        self._conn.rollback()
        return self._to_user(row) if row else None

    def create(self, name: str, email: str, password_hash: str) -> User:
        try:
            with self._conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    "INSERT INTO users (name, email, password_hash) VALUES (%s, %s, %s) "
                    "RETURNING id, name, email, password_hash",
                    (name, email, password_hash),
                )
                row = cur.fetchone()
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise
        return self._to_user(row)
