from __future__ import annotations

import json
from pathlib import Path

from bizdash.logging.error_log import ErrorLogBuffer
from bizdash.models.error_record import FILE_LEVEL_ROW, ValidationErrorRecord
from bizdash.models.validation_error import ValidationError

KEYS = {"timestamp", "file", "kind", "row", "column", "message"}


def test_record_json_line():
    rec = ValidationErrorRecord.create("customers.csv", "customers", 3, "Email", "Invalid email format")
    data = json.loads(rec.to_json_line())
    assert set(data) == KEYS
    assert data["row"] == 3
    assert data["timestamp"].endswith("Z")


def test_record_from_error_keeps_structural_row():
    err = ValidationError(0, "Amount", "Missing required column: Amount")
    rec = ValidationErrorRecord.from_error("sales.csv", "sales", err)
    assert rec.row == 0
    assert rec.column == "Amount"


def test_file_level_row():
    rec = ValidationErrorRecord.create("x.csv", "", FILE_LEVEL_ROW, "", "File size must be less than 10MB")
    assert json.loads(rec.to_json_line())["row"] == -1


def test_flush_writes_lines_and_clears(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ValidationErrorRecord.create("a.csv", "sales", 2, "Amount", "Amount is required"))
    buf.append(ValidationErrorRecord.create("a.csv", "sales", 3, "Date", "Date is required"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent.name == "logs"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    assert all(set(json.loads(raw)) == KEYS for raw in lines)
    assert len(buf) == 0


def test_flush_appends_to_same_file(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ValidationErrorRecord.create("a.csv", "sales", 2, "Amount", "Amount is required"))
    first = buf.flush()
    buf.extend([ValidationErrorRecord.create("b.csv", "sales", 2, "Date", "Date is required")])
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2


def test_empty_flush_creates_nothing(temp_workdir: Path):
    buf = ErrorLogBuffer(logs_dir=temp_workdir / "other_logs")
    assert buf.flush() is None
    assert not (temp_workdir / "other_logs").exists()
