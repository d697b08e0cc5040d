"""Domain models for the bizdash analytics backend.

This package contains the data classes shared by the ingestion pipeline,
the manual entry session, the upload session and the CLI.
"""

from .error_record import ValidationErrorRecord
from .manual_entry import CATEGORIES, ManualEntryRecord
from .parsed_table import ParsedRow, ParsedTable
from .processing_result import BatchResult, FileReport
from .uploaded_file import UploadedFile, UploadStatus
from .validation_error import ValidationError

__all__ = [
    # Ingestion models
    "ParsedRow",
    "ParsedTable",
    "ValidationError",
    "ValidationErrorRecord",
    # Entry / upload models
    "CATEGORIES",
    "ManualEntryRecord",
    "UploadedFile",
    "UploadStatus",
    # Batch results
    "BatchResult",
    "FileReport",
]
