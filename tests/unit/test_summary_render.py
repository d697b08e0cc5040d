from __future__ import annotations

import re
from datetime import datetime, timezone

from bizdash.models.processing_result import BatchResult
from bizdash.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=(\d+) valid=(\d+) invalid=(\d+) rejected=(\d+) "
    r"rows=(\d+) errors=(\d+) elapsed_sec=(\d+(?:\.\d+)?)$"
)

T0 = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def _result(elapsed: float = 2.0, **counts: int) -> BatchResult:
    values = dict(valid_files=0, invalid_files=0, rejected_files=0, total_rows=0, total_errors=0)
    values.update(counts)
    return BatchResult(start_time=T0, end_time=T0, elapsed_seconds=elapsed, **values)


def test_summary_matches_contract():
    line = render_summary_line(_result(valid_files=2, invalid_files=1, total_rows=40, total_errors=3))
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.groups() == ("3", "2", "1", "0", "40", "3", "2")


def test_summary_empty_run():
    assert render_summary_line(_result(elapsed=0)) == (
        "SUMMARY files=0 valid=0 invalid=0 rejected=0 rows=0 errors=0 elapsed_sec=0"
    )


def test_summary_small_elapsed_not_scientific():
    line = render_summary_line(_result(elapsed=0.000123))
    assert line.endswith("elapsed_sec=0.000123")
    assert SUMMARY_PATTERN.match(line)


def test_summary_rounds_elapsed():
    assert render_summary_line(_result(elapsed=1.23456)).endswith("elapsed_sec=1.235")
