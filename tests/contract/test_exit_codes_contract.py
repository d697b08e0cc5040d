from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from bizdash.cli import main as cli_main
from bizdash.services.orchestrator import ProcessingError

"""Exit code contract: 0 all valid, 2 some file invalid or rejected, 1 fatal."""


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    # no config/bizdash.yml
    code = cli_main([])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "bizdash.yml").write_text("inference: filename\n", encoding="utf-8")
    assert cli_main([]) == 1
    assert "config validation failed" in capsys.readouterr().out


def test_exit_code_all_success(temp_workdir: Path, write_config, sales_csv: str, capsys):
    data = temp_workdir / "data"
    (data / "jan_sales.csv").write_text(sales_csv, encoding="utf-8")
    (data / "customers.csv").write_text("Name,Email\nAnn,ann@example.com\n", encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2 valid=2 invalid=0 rejected=0 rows=4 errors=0" in out


def test_exit_code_empty_directory_is_success(write_config, capsys):
    assert cli_main([]) == 0
    assert "SUMMARY files=0 valid=0 invalid=0 rejected=0 rows=0 errors=0" in capsys.readouterr().out


def test_exit_code_partial_failure(csv_files, write_config):
    assert cli_main([]) == 2


def test_exit_code_processing_error(write_config, capsys):
    with patch("bizdash.cli.__main__.validate_all", side_effect=ProcessingError("Error reading directory data: denied")):
        code = cli_main([])
    assert code == 1
    assert "ERROR processing: Error reading directory data: denied" in capsys.readouterr().out
