from .connection import connect, resolve_dsn

__all__ = [
    "connect",
    "resolve_dsn",
]
