from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .parsed_table import ParsedRow
from .validation_error import ValidationError

"""UploadedFile domain model and UploadStatus enum.

An UploadedFile is the in-memory state of one accepted CSV upload, from
preview (parsed and validated) through the simulated upload.
"""

__all__ = [
    "UploadStatus",
    "UploadedFile",
]


class UploadStatus(Enum):
    """Upload lifecycle.

    State transitions: preview -> uploading -> (success | error)

    - PREVIEW: parsed and validated, waiting for confirmation
    - UPLOADING: confirmed, submission in progress
    - SUCCESS: submission acknowledged
    - ERROR: submission failed; confirm may be retried
    """
    PREVIEW = "preview"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class UploadedFile:
    id: str
    name: str
    size: int  # bytes
    kind: str  # DatasetKind value
    headers: list[str]
    rows: list[ParsedRow]
    errors: list[ValidationError] = field(default_factory=list)
    status: UploadStatus = UploadStatus.PREVIEW
    progress: int = 100  # percent; preview is fully read
    error: str | None = None  # last submission failure

    @property
    def can_confirm(self) -> bool:
        """Confirmation is blocked while any validation error exists."""
        return not self.errors and self.status in (UploadStatus.PREVIEW, UploadStatus.ERROR)
