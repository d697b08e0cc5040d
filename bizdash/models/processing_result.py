from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Result models for batch validation of a CSV directory."""

__all__ = [
    "BatchResult",
    "FileReport",
]


@dataclass(frozen=True)
class FileReport:
    """Per-file validation outcome."""
    file_name: str
    status: str  # valid / invalid / rejected
    kind: str | None  # None when rejected before parsing
    rows: int
    errors: int
    elapsed_seconds: float


@dataclass(frozen=True)
class BatchResult:
    """Aggregated outcome used for the SUMMARY line and the exit code."""
    valid_files: int
    invalid_files: int
    rejected_files: int
    total_rows: int
    total_errors: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_reports: list[FileReport] | None = None

    @property
    def total_files(self) -> int:
        return self.valid_files + self.invalid_files + self.rejected_files
