from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError as SchemaValidationError

"""Config loader.

Responsibilities:
- Load YAML config/bizdash.yml
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults for every optional key
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/bizdash.yml")

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_HASH_METHOD = "pbkdf2:sha256:600000"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DatabaseConfig:
    """User store connection fallback. Environment variables take precedence."""
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 5000


@dataclass(frozen=True)
class AppConfig:
    source_directory: str
    inference: str = "filename"  # filename | content
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    low_stock_threshold: int = 10
    error_display_limit: int = 5
    submission_delay_seconds: float = 1.0
    hash_method: str = DEFAULT_HASH_METHOD
    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / unreadable, or the data fails
            validation (missing required keys, wrong types, unknown keys)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except SchemaValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    db_raw = data.get("database") or {}
    server_raw = data.get("server") or {}
    return AppConfig(
        source_directory=data["source_directory"],
        inference=data.get("inference", "filename"),
        max_upload_bytes=data.get("max_upload_bytes", DEFAULT_MAX_UPLOAD_BYTES),
        low_stock_threshold=data.get("low_stock_threshold", 10),
        error_display_limit=data.get("error_display_limit", 5),
        submission_delay_seconds=float((data.get("submission") or {}).get("delay_seconds", 1.0)),
        hash_method=(data.get("auth") or {}).get("hash_method", DEFAULT_HASH_METHOD),
        server=ServerConfig(
            host=server_raw.get("host", "127.0.0.1"),
            port=server_raw.get("port", 5000),
        ),
        database=DatabaseConfig(
            host=db_raw.get("host"),
            port=db_raw.get("port"),
            user=db_raw.get("user"),
            password=db_raw.get("password"),
            database=db_raw.get("database"),
            dsn=db_raw.get("dsn"),
        ),
    )
