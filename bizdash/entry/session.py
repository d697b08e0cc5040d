from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from enum import Enum

from ..models.manual_entry import ENTRY_FIELDS, ManualEntryRecord
from ..services.submission import Ack, SubmissionError, Submitter
from .validator import validate_entry

"""Manual entry session store.

Owns the draft record, its validation display state and the pending list.

Draft lifecycle:
    EDITING --submit() ok--> SUBMITTED (record copied to pending, draft reset)
    EDITING --submit() failed--> EDITING (full error map visible)
    SUBMITTED --update()--> EDITING

Pending record lifecycle: pending -> removed (remove(index)) or saved
(save_all(), all-or-nothing).
"""

logger = logging.getLogger(__name__)

__all__ = [
    "EntrySession",
    "EntrySessionError",
    "EntryState",
]


class EntrySessionError(Exception):
    pass


class EntryState(Enum):
    EDITING = "editing"
    SUBMITTED = "submitted"


class EntrySession:
    """Explicitly owned manual entry state (one per user session).

    Errors are shown for a field once it has been touched (left after
    editing) or after a submit attempt; typing into a field hides its error
    until the field is touched again or the next submit.
    """

    def __init__(self, submitter: Submitter, today: Callable[[], date] = date.today) -> None:
        self._submitter = submitter
        self._today = today
        self.draft = ManualEntryRecord.blank(self._today())
        self.state = EntryState.EDITING
        self.pending: list[ManualEntryRecord] = []
        self._revealed: set[str] = set()

    def update(self, field: str, value: str) -> None:
        if field not in ENTRY_FIELDS:
            raise EntrySessionError(f"unknown field: {field}")
        setattr(self.draft, field, value)
        self._revealed.discard(field)
        self.state = EntryState.EDITING

    def reset_draft(self) -> None:
        """Start a fresh draft (defaults, no errors shown); pending is untouched."""
        self.draft = ManualEntryRecord.blank(self._today())
        self._revealed = set()
        self.state = EntryState.EDITING

    def touch(self, field: str) -> None:
        if field not in ENTRY_FIELDS:
            raise EntrySessionError(f"unknown field: {field}")
        self._revealed.add(field)

    def visible_errors(self) -> dict[str, str]:
        return {f: m for f, m in validate_entry(self.draft).items() if f in self._revealed}

    def submit(self) -> dict[str, str]:
        """Validate every field; on success move the draft to pending.

        Returns the full error map (empty on success).
        """
        errors = validate_entry(self.draft)
        if errors:
            self._revealed = set(ENTRY_FIELDS)
            self.state = EntryState.EDITING
            logger.debug(f"entry rejected fields={sorted(errors)}")
            return errors
        self.pending.append(self.draft.copy())
        self.reset_draft()
        self.state = EntryState.SUBMITTED
        logger.info(f"entry added pending={len(self.pending)}")
        return {}

    def remove(self, index: int) -> ManualEntryRecord:
        if not 0 <= index < len(self.pending):
            raise EntrySessionError(f"no pending entry at index {index}")
        removed = self.pending.pop(index)
        logger.info(f"entry removed pending={len(self.pending)}")
        return removed

    def save_all(self) -> Ack:
        """Submit all pending entries as one batch.

        Raises:
            EntrySessionError: when there is nothing to save
            SubmissionError: when the batch was refused; pending is kept as is
        """
        if not self.pending:
            raise EntrySessionError("No entries to save")
        try:
            ack = self._submitter.submit([r.to_dict() for r in self.pending])
        except SubmissionError as e:
            logger.error(f"save failed pending={len(self.pending)}: {e}")
            raise
        logger.info(f"{ack.accepted} entries saved")
        self.pending.clear()
        return ack
