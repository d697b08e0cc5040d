from __future__ import annotations

import json
from pathlib import Path

from bizdash.cli import main as cli_main

"""Integration test: a run where some files fail validation.

Each file is validated on its own; a bad file never stops the others, and
every problem lands in the JSON Lines error log.
"""


def test_partial_failure_run(csv_files, write_config, temp_workdir: Path, capsys):
    data = temp_workdir / "data"
    (data / "readme.txt").write_text("ignored", encoding="utf-8")
    (data / "march_sales.csv").write_text(
        "Date,Product,Amount,Customer\n"
        "2024-03-01,,12.00,Ann\n"
        "\n"
        "2024-03-02,Pen,abc,Bob\n",
        encoding="utf-8",
    )

    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY files=3 valid=1 invalid=2 rejected=0 rows=7 errors=3" in out
    assert "WARN march_sales.csv: kind=sales found 2 validation errors" in out
    # blank line skipped: the second data row keeps row number 3
    assert "WARN   Row 3, Amount: Amount must be a valid number" in out

    [log] = list((temp_workdir / "logs").glob("errors-*.log"))
    records = [json.loads(raw) for raw in log.read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["row"], r["column"]) for r in records] == [
        ("customer_list.csv", 3, "Email"),
        ("march_sales.csv", 2, "Product"),
        ("march_sales.csv", 3, "Amount"),
    ]


def test_partial_failure_error_display_limit(write_config, temp_workdir: Path, capsys):
    cfg = temp_workdir / "config" / "bizdash.yml"
    cfg.write_text(cfg.read_text(encoding="utf-8") + "error_display_limit: 2\n", encoding="utf-8")
    rows = "".join(f"2024-01-0{i},,{i}\n" for i in range(1, 6))
    (temp_workdir / "data" / "sales.csv").write_text("Date,Product,Amount\n" + rows, encoding="utf-8")

    assert cli_main([]) == 2
    out = capsys.readouterr().out
    assert "WARN   Row 2, Product: Product is required" in out
    assert "WARN   Row 3, Product: Product is required" in out
    assert "Row 4, Product" not in out
    assert "WARN   +3 more" in out
