from __future__ import annotations

import logging
import re
from pathlib import Path

from ..models.parsed_table import ParsedRow, ParsedTable

"""CSV upload reader.

- Upload gate: only ``.csv`` names up to 10MB are accepted; rejected files
  never reach the parser.
- parse_csv: line-based split. First non-blank line is the header, every
  other non-blank line is a data row. This is deliberately not a full CSV
  parser: quoted commas, embedded newlines and escaped quotes are not
  supported.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_UPLOAD_BYTES",
    "UploadRejectedError",
    "check_upload",
    "decode_upload",
    "parse_csv",
    "read_upload",
]

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class UploadRejectedError(Exception):
    """Raised when a file fails the extension or size gate."""


def check_upload(name: str, size: int, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Reject non-CSV names and oversized files.

    Raises:
        UploadRejectedError: with the user-facing message
    """
    if not name.lower().endswith(".csv"):
        raise UploadRejectedError("Please upload CSV files only")
    if size > max_bytes:
        raise UploadRejectedError(f"File size must be less than {_format_limit(max_bytes)}")


def _format_limit(max_bytes: int) -> str:
    for unit, factor in (("MB", 1024 * 1024), ("KB", 1024)):
        if max_bytes >= factor and max_bytes % factor == 0:
            return f"{max_bytes // factor}{unit}"
    return f"{max_bytes} bytes"


def decode_upload(content: bytes) -> str:
    # utf-8-sig drops a leading BOM that spreadsheet exports like to add
    return content.decode("utf-8-sig", errors="replace")


def read_upload(path: Path, max_bytes: int = MAX_UPLOAD_BYTES) -> str:
    """Apply the upload gate to a file on disk and return its decoded text."""
    check_upload(path.name, path.stat().st_size, max_bytes)
    return decode_upload(path.read_bytes())


def _split_fields(line: str) -> list[str]:
    return [f.strip().replace('"', "") for f in line.split(",")]


def parse_csv(text: str) -> ParsedTable:
    """Parse raw delimited text into a ParsedTable.

    Blank lines (after trimming) are skipped anywhere in the input. Short
    rows are padded with "" and values beyond the header count are dropped.
    Input with no non-blank lines yields an empty table.
    """
    lines = [ln for ln in _LINE_BREAK.split(text) if ln.strip()]
    if not lines:
        return ParsedTable(headers=[], rows=[])

    headers = _split_fields(lines[0])
    rows: list[ParsedRow] = []
    for offset, line in enumerate(lines[1:]):
        cells = _split_fields(line)
        values: dict[str, str] = {}
        # positional assignment: a later duplicate header overwrites an earlier one
        for i, header in enumerate(headers):
            values[header] = cells[i] if i < len(cells) else ""
        rows.append(ParsedRow(row_index=offset + 2, values=values))

    logger.debug(f"parsed csv headers={headers} rows={len(rows)}")
    return ParsedTable(headers=headers, rows=rows)
