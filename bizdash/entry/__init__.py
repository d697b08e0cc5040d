"""Manual sales entry: field validator and session store."""

from .session import EntrySession, EntrySessionError, EntryState
from .validator import validate_entry

__all__ = [
    "EntrySession",
    "EntrySessionError",
    "EntryState",
    "validate_entry",
]
