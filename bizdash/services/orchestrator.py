from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import AppConfig
from ..ingest.reader import UploadRejectedError, parse_csv, read_upload
from ..ingest.schema import DatasetKind, required_columns, resolve_dataset_kind
from ..ingest.validator import summarize_errors, validate_rows
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import FILE_LEVEL_ROW, ValidationErrorRecord
from ..models.parsed_table import ParsedTable
from ..models.processing_result import BatchResult, FileReport
from .progress import ProgressTracker

"""Batch validation of a CSV directory.

Each .csv file in the configured directory runs through the ingestion
pipeline on its own: upload gate -> parse -> kind resolution -> row
validation. Files share no state; one bad file never stops the run. Every
validation error is buffered into the JSON Lines error log, flushed once at
the end of the run.
"""

logger = logging.getLogger(__name__)

STATUS_VALID = "valid"
STATUS_INVALID = "invalid"
STATUS_REJECTED = "rejected"


class ProcessingError(Exception):
    """Fatal error that prevents the run (e.g. missing source directory)."""


@dataclass(frozen=True)
class FileValidation:
    """Outcome of the pipeline for one file (table is None when rejected)."""
    path: Path
    kind: DatasetKind | None
    table: ParsedTable | None
    records: list[ValidationErrorRecord]
    status: str


def scan_csv_files(directory: Path) -> list[Path]:
    """List .csv files in ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv"),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def validate_file(
    path: Path, config: AppConfig, kind: DatasetKind | str | None = None
) -> FileValidation:
    try:
        text = read_upload(path, config.max_upload_bytes)
    except (UploadRejectedError, OSError) as e:
        record = ValidationErrorRecord.create(path.name, "", FILE_LEVEL_ROW, "", str(e))
        return FileValidation(path, None, None, [record], STATUS_REJECTED)

    table = parse_csv(text)
    resolved = resolve_dataset_kind(
        path.name, table.headers, explicit=kind, strategy=config.inference  # type: ignore[arg-type]
    )
    errors = validate_rows(table.headers, table.rows, required_columns(resolved))
    records = [ValidationErrorRecord.from_error(path.name, resolved.value, e) for e in errors]
    if errors:
        logger.warning(f"{path.name}: kind={resolved.value} found {len(errors)} validation errors")
        for line in summarize_errors(errors, config.error_display_limit):
            logger.warning(f"  {line}")
    else:
        logger.info(f"{path.name}: kind={resolved.value} rows={len(table)} validated successfully")
    return FileValidation(path, resolved, table, records, STATUS_INVALID if errors else STATUS_VALID)


def validate_all(
    config: AppConfig,
    kind: DatasetKind | str | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> BatchResult:
    """Validate every CSV file of the configured source directory.

    Raises:
        ProcessingError: the directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    file_paths = scan_csv_files(Path(config.source_directory))

    reports: list[FileReport] = []
    counts = {STATUS_VALID: 0, STATUS_INVALID: 0, STATUS_REJECTED: 0}
    total_rows = 0
    total_errors = 0

    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            file_start = datetime.now(UTC)
            outcome = validate_file(path, config, kind)
            elapsed = (datetime.now(UTC) - file_start).total_seconds()

            if outcome.status == STATUS_REJECTED:
                logger.error(f"{path.name}: {outcome.records[0].message}")
            error_log.extend(outcome.records)
            counts[outcome.status] += 1
            rows = len(outcome.table) if outcome.table is not None else 0
            total_rows += rows
            total_errors += len(outcome.records)

            reports.append(
                FileReport(
                    file_name=path.name,
                    status=outcome.status,
                    kind=outcome.kind.value if outcome.kind is not None else None,
                    rows=rows,
                    errors=len(outcome.records),
                    elapsed_seconds=elapsed,
                )
            )
            progress.set_postfix(valid=counts[STATUS_VALID], invalid=counts[STATUS_INVALID])
            progress.finish_file()

    try:
        log_path = error_log.flush()
    except OSError as e:
        # the run result stays valid without the log file
        logger.warning(f"failed writing error log: {e}")
    else:
        if log_path is not None and total_errors:
            logger.info(f"error log: {log_path}")

    end_time = datetime.now(UTC)
    return BatchResult(
        valid_files=counts[STATUS_VALID],
        invalid_files=counts[STATUS_INVALID],
        rejected_files=counts[STATUS_REJECTED],
        total_rows=total_rows,
        total_errors=total_errors,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_reports=reports,
    )
