from __future__ import annotations

from ..models.processing_result import BatchResult

"""SUMMARY line rendering for batch validation runs."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for tiny durations
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={n} valid={v} invalid={i} rejected={r} rows={rows}
    errors={errors} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> render_summary_line(BatchResult(
        ...     valid_files=2, invalid_files=1, rejected_files=0, total_rows=30,
        ...     total_errors=4, start_time=t, end_time=t, elapsed_seconds=1.5))
        'SUMMARY files=3 valid=2 invalid=1 rejected=0 rows=30 errors=4 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"valid={result.valid_files} "
        f"invalid={result.invalid_files} "
        f"rejected={result.rejected_files} "
        f"rows={result.total_rows} "
        f"errors={result.total_errors} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
