"""CSV ingestion: upload gate, parser, dataset kind inference, row validation."""

from .reader import MAX_UPLOAD_BYTES, UploadRejectedError, check_upload, parse_csv, read_upload
from .schema import (
    DatasetKind,
    infer_dataset_kind,
    infer_kind_from_headers,
    required_columns,
    resolve_dataset_kind,
)
from .validator import summarize_errors, validate_rows, validate_table

__all__ = [
    "MAX_UPLOAD_BYTES",
    "DatasetKind",
    "UploadRejectedError",
    "check_upload",
    "infer_dataset_kind",
    "infer_kind_from_headers",
    "parse_csv",
    "read_upload",
    "required_columns",
    "resolve_dataset_kind",
    "summarize_errors",
    "validate_rows",
    "validate_table",
]
