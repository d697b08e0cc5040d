from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .validation_error import ValidationError

"""ValidationErrorRecord model for the JSON Lines error log.

Each record is one validation problem found in one uploaded file. Besides the
structural row 0 and data rows (2, 3, ...), row=-1 is used for file-level
problems where no row applies (rejected upload, unreadable file).

Schema (no extra keys): timestamp, file, kind, row, column, message
"""

__all__ = [
    "FILE_LEVEL_ROW",
    "ValidationErrorRecord",
]

FILE_LEVEL_ROW = -1


@dataclass(frozen=True)
class ValidationErrorRecord:
    """Structured validation error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Uploaded file name
        kind: Dataset kind the file was validated as ("" when unknown)
        row: Row number; 0 = structural, -1 = file-level
        column: Offending column ("" for file-level records)
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    kind: str
    row: int
    column: str
    message: str

    @staticmethod
    def create(file: str, kind: str, row: int, column: str, message: str) -> ValidationErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ValidationErrorRecord(
            timestamp=ts,
            file=file,
            kind=kind,
            row=row,
            column=column,
            message=message,
        )

    @staticmethod
    def from_error(file: str, kind: str, error: ValidationError) -> ValidationErrorRecord:
        return ValidationErrorRecord.create(file, kind, error.row, error.column, error.message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
