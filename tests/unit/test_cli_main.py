from __future__ import annotations

import os
import shutil
from datetime import date
from pathlib import Path

from bizdash.cli import main as cli_main


def test_missing_config_is_fatal(temp_workdir: Path, capsys):
    code = cli_main([])
    assert code == 1
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_missing_source_directory_is_fatal(temp_workdir: Path, write_config, capsys):
    shutil.rmtree(temp_workdir / "data")
    code = cli_main([])
    assert code == 1
    assert "ERROR directory not found: data" in capsys.readouterr().out


def test_alternate_config_path(temp_workdir: Path, sales_csv: str, capsys):
    other = temp_workdir / "alt.yml"
    other.write_text("source_directory: ./data\n", encoding="utf-8")
    (temp_workdir / "data" / "sales.csv").write_text(sales_csv, encoding="utf-8")
    code = cli_main(["--config", str(other)])
    assert code == 0
    assert "SUMMARY files=1 valid=1 invalid=0 rejected=0 rows=3 errors=0" in capsys.readouterr().out


def test_validation_run_reports_files(csv_files, write_config, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "INFO Validating files from: data" in out
    assert "INFO q1_sales.csv: kind=sales rows=3 validated successfully" in out
    assert "WARN customer_list.csv: kind=customers found 1 validation errors" in out
    assert "WARN   Row 3, Email: Invalid email format" in out


def test_kind_flag_overrides_inference(csv_files, write_config, capsys):
    code = cli_main(["--kind", "customers"])
    out = capsys.readouterr().out
    assert code == 2
    assert "q1_sales.csv: kind=customers" in out
    assert "Missing required column: Name" in out


def test_debug_flag(temp_workdir: Path, write_config, capsys):
    cli_main(["--debug"])
    assert "DEBUG debug mode enabled" in capsys.readouterr().out


def test_inspect_data(csv_files, write_config, capsys):
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: customer_list.csv" in out
    assert "kind=customers headers=['Name', 'Email']" in out
    assert "FILE: q1_sales.csv" in out
    assert "'total_sales': 3518.5" in out
    assert "SUMMARY" not in out


def test_inspect_data_empty_directory(write_config, capsys):
    assert cli_main(["--inspect-data"]) == 0
    assert "inspect: no .csv files" in capsys.readouterr().out


def test_templates_flag_needs_no_config(temp_workdir: Path):
    out_dir = temp_workdir / "templates"
    assert cli_main(["--templates", str(out_dir)]) == 0
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "sample_customers_data.csv",
        "sample_inventory_data.csv",
        "sample_sales_data.csv",
    ]


def test_export_flag(temp_workdir: Path):
    out_dir = temp_workdir / "reports"
    assert cli_main(["--export", str(out_dir)]) == 0
    assert (out_dir / f"analytics-report-{date.today().isoformat()}.json").exists()


def test_env_file_is_loaded(temp_workdir: Path, write_config, monkeypatch):
    monkeypatch.delenv("BIZDASH_TEST_MARKER", raising=False)
    (temp_workdir / ".env").write_text("BIZDASH_TEST_MARKER=1\n", encoding="utf-8")
    cli_main([])
    assert os.environ.get("BIZDASH_TEST_MARKER") == "1"
    monkeypatch.delenv("BIZDASH_TEST_MARKER")
