from __future__ import annotations

import logging
import uuid
from dataclasses import replace

from ..ingest.reader import MAX_UPLOAD_BYTES, check_upload, decode_upload, parse_csv
from ..ingest.schema import DatasetKind, InferenceStrategy, required_columns, resolve_dataset_kind
from ..ingest.validator import validate_rows
from ..models.parsed_table import ParsedRow
from ..models.uploaded_file import UploadedFile, UploadStatus
from .submission import SubmissionError, Submitter

"""Upload session store.

Holds the uploaded files of one user session: each accepted file is parsed
and validated on arrival (status preview) and can then be confirmed, which
runs the submission (uploading -> success | error), or removed. Files do not
share state; nothing outlives the session.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "UploadBlockedError",
    "UploadSession",
    "search_rows",
]


class UploadBlockedError(Exception):
    """Raised when confirming a file that still has validation errors."""


def search_rows(rows: list[ParsedRow], term: str) -> list[ParsedRow]:
    """Rows where any value contains ``term`` (case-insensitive)."""
    needle = term.lower()
    if not needle:
        return list(rows)
    return [r for r in rows if any(needle in v.lower() for v in r.values.values())]


class UploadSession:
    def __init__(
        self,
        submitter: Submitter,
        max_bytes: int = MAX_UPLOAD_BYTES,
        strategy: InferenceStrategy = "filename",
    ) -> None:
        self._submitter = submitter
        self.max_bytes = max_bytes
        self.strategy = strategy
        self._files: dict[str, UploadedFile] = {}

    @property
    def files(self) -> list[UploadedFile]:
        return list(self._files.values())

    def get(self, file_id: str) -> UploadedFile:
        try:
            return self._files[file_id]
        except KeyError:
            raise KeyError(f"unknown upload: {file_id}") from None

    def add(self, name: str, content: bytes, kind: DatasetKind | str | None = None) -> UploadedFile:
        """Gate, parse and validate one file.

        Raises:
            UploadRejectedError: extension or size gate failed (file not stored)
        """
        check_upload(name, len(content), self.max_bytes)
        table = parse_csv(decode_upload(content))
        resolved = resolve_dataset_kind(name, table.headers, explicit=kind, strategy=self.strategy)
        errors = validate_rows(table.headers, table.rows, required_columns(resolved))
        uploaded = UploadedFile(
            id=uuid.uuid4().hex[:8],
            name=name,
            size=len(content),
            kind=resolved.value,
            headers=table.headers,
            rows=table.rows,
            errors=errors,
        )
        self._files[uploaded.id] = uploaded
        if errors:
            logger.warning(f"{name}: found {len(errors)} validation errors")
        else:
            logger.info(f"{name}: file validated successfully")
        return uploaded

    def confirm(self, file_id: str) -> UploadedFile:
        """Submit a validated file.

        Raises:
            UploadBlockedError: the file has validation errors or is already uploaded
        """
        current = self.get(file_id)
        if not current.can_confirm:
            if current.errors:
                raise UploadBlockedError(
                    f"{current.name}: fix {len(current.errors)} validation errors before uploading"
                )
            raise UploadBlockedError(f"{current.name}: already {current.status.value}")

        self._files[file_id] = replace(current, status=UploadStatus.UPLOADING, progress=0, error=None)
        try:
            self._submitter.submit([r.values for r in current.rows])
        except SubmissionError as e:
            logger.error(f"{current.name}: upload failed: {e}")
            result = replace(current, status=UploadStatus.ERROR, progress=0, error=str(e))
        else:
            logger.info(f"{current.name}: file uploaded successfully")
            result = replace(current, status=UploadStatus.SUCCESS, progress=100, error=None)
        self._files[file_id] = result
        return result

    def remove(self, file_id: str) -> UploadedFile:
        removed = self.get(file_id)
        del self._files[file_id]
        return removed

    def preview(self, file_id: str, term: str = "") -> list[ParsedRow]:
        return search_rows(self.get(file_id).rows, term)
