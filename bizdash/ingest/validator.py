from __future__ import annotations

import re
from collections.abc import Sequence

from ..models.parsed_table import ParsedRow, ParsedTable
from ..models.validation_error import STRUCTURAL_ROW, ValidationError
from .numbers import parse_float, parse_int
from .schema import DatasetKind, required_columns

"""Row validator for parsed CSV uploads.

Error order:
1. structural errors (row 0), one per missing required column
2. per row, in row order: "is required" errors in required-column
   declaration order, then the Email / Amount / Stock format checks

Format checks apply to any row that has the column and a non-empty value,
whether or not the column is required for the dataset kind. The validator is
a pure function of its inputs.
"""

__all__ = [
    "EMAIL_PATTERN",
    "summarize_errors",
    "validate_rows",
    "validate_table",
]

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def _format_errors(row: ParsedRow) -> list[ValidationError]:
    errors: list[ValidationError] = []
    email = row.get("Email")
    if email and not EMAIL_PATTERN.search(email):
        errors.append(ValidationError(row.row_index, "Email", "Invalid email format"))
    amount = row.get("Amount")
    if amount and parse_float(amount) is None:
        errors.append(ValidationError(row.row_index, "Amount", "Amount must be a valid number"))
    stock = row.get("Stock")
    if stock and parse_int(stock) is None:
        errors.append(ValidationError(row.row_index, "Stock", "Stock must be a valid number"))
    return errors


def validate_rows(
    headers: Sequence[str],
    rows: Sequence[ParsedRow],
    required: Sequence[str],
) -> list[ValidationError]:
    """Validate parsed rows against a required-column set.

    Parameters
    ----------
    headers: header names as parsed
    rows: parsed data rows
    required: required columns in declaration order

    Returns the accumulated errors (never deduplicated).
    """
    errors: list[ValidationError] = []
    present = set(headers)
    for col in required:
        if col not in present:
            errors.append(
                ValidationError(STRUCTURAL_ROW, col, f"Missing required column: {col}")
            )

    for row in rows:
        for col in required:
            value = row.get(col) or ""
            if not value.strip():
                errors.append(ValidationError(row.row_index, col, f"{col} is required"))
        errors.extend(_format_errors(row))
    return errors


def validate_table(table: ParsedTable, kind: DatasetKind) -> list[ValidationError]:
    return validate_rows(table.headers, table.rows, required_columns(kind))


def summarize_errors(errors: Sequence[ValidationError], limit: int = 5) -> list[str]:
    """First ``limit`` errors as display lines plus a "+N more" line when truncated."""
    lines = [str(e) for e in errors[:limit]]
    hidden = len(errors) - limit
    if hidden > 0:
        lines.append(f"+{hidden} more")
    return lines
