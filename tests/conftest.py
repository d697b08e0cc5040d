# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from bizdash.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
inference: filename
max_upload_bytes: 10485760
low_stock_threshold: 10
submission:
  delay_seconds: 0
auth:
  hash_method: "pbkdf2:sha256:1000"
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "bizdash.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sales_csv() -> str:
    return (
        "Date,Product,Category,Amount,Customer,Quantity\n"
        "2024-01-15,iPhone 13,Electronics,999.00,John Doe,1\n"
        "2024-01-16,MacBook Pro,Electronics,2499.00,Jane Smith,1\n"
        "2024-01-17,Novel,Books,20.50,Bob Johnson,2\n"
    )


@pytest.fixture()
def csv_files(temp_workdir: Path, sales_csv: str) -> list[Path]:
    """One valid sales file and one customers file with a bad email."""
    data = temp_workdir / "data"
    good = data / "q1_sales.csv"
    good.write_text(sales_csv, encoding="utf-8")
    bad = data / "customer_list.csv"
    bad.write_text("Name,Email\nAlice,alice@example.com\nBob,not-an-email\n", encoding="utf-8")
    return [good, bad]


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
