from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import psycopg2

from ..config.loader import DatabaseConfig

"""PostgreSQL connection handling for the user store.

DSN resolution order:
    1. DATABASE_URL / PGDSN environment variables (whole DSN)
    2. config ``database.dsn``
    3. individual PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE,
       falling back to the config ``database`` section, then libpq defaults
``.env`` is loaded by the CLI with override, so its values count as
environment variables.
"""

__all__ = [
    "connect",
    "resolve_dsn",
]


def resolve_dsn(db_cfg: DatabaseConfig, env: Mapping[str, str] | None = None) -> str:
    env = os.environ if env is None else env
    dsn = env.get("DATABASE_URL") or env.get("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = env.get("PGHOST", db_cfg.host or "localhost")
    port = env.get("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = env.get("PGUSER", db_cfg.user or "postgres")
    password = env.get("PGPASSWORD", db_cfg.password or "")
    database = env.get("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


def connect(db_cfg: DatabaseConfig) -> Any:
    """Long-lived connection for the web app's user store."""
    conn = psycopg2.connect(resolve_dsn(db_cfg))
    conn.autocommit = False
    return conn
