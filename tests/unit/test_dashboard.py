from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from bizdash.ingest.reader import parse_csv
from bizdash.ingest.schema import DatasetKind
from bizdash.ingest.validator import validate_table
from bizdash.services.dashboard import (
    SAMPLE_DASHBOARD,
    compute_kpis,
    export_dashboard,
    export_filename,
    filter_top_products,
    sample_dashboard,
)


def test_export_filename():
    assert export_filename(date(2024, 2, 29)) == "analytics-report-2024-02-29.json"


def test_export_writes_indented_json(tmp_path: Path):
    path = export_dashboard(tmp_path, today=date(2024, 1, 2))
    assert path.name == "analytics-report-2024-01-02.json"
    text = path.read_text(encoding="utf-8")
    assert text.startswith('{\n  "kpis"')
    assert json.loads(text) == SAMPLE_DASHBOARD


def test_sample_dashboard_is_a_copy():
    data = sample_dashboard()
    data["kpis"]["totalSales"]["value"] = 0
    assert SAMPLE_DASHBOARD["kpis"]["totalSales"]["value"] == 24567


def test_filter_top_products():
    products = SAMPLE_DASHBOARD["topProducts"]
    assert len(filter_top_products(products)) == 5
    names = [p["name"] for p in filter_top_products(products, search="MAC")]
    assert names == ["MacBook Air"]
    assert filter_top_products(products, category="Books") == []
    assert len(filter_top_products(products, search="a", category="Electronics")) == 4


def test_sales_kpis(sales_csv: str):
    kpis = compute_kpis(parse_csv(sales_csv), DatasetKind.SALES)
    assert kpis["rows"] == 3
    assert kpis["total_sales"] == 3518.5
    assert kpis["total_orders"] == 3
    assert kpis["units_sold"] == 4
    assert kpis["total_customers"] == 3
    assert kpis["sales_by_category"] == {"Books": 20.5, "Electronics": 3498.0}


def test_inventory_kpis():
    table = parse_csv("Product,Stock,Price\nA,5,2.00\nB,50,1.50\nC,x,3\n")
    kpis = compute_kpis(table, DatasetKind.INVENTORY, low_stock_threshold=10)
    assert kpis["total_products"] == 3
    assert kpis["total_stock"] == 55
    assert kpis["low_stock_items"] == 1
    assert kpis["inventory_value"] == 85.0


def test_customer_kpis():
    table = parse_csv("Name,Email,City,Total Orders\nA,a@b.co,Paris,2\nB,b@c.co,Paris,3\n")
    kpis = compute_kpis(table, DatasetKind.CUSTOMERS)
    assert kpis["total_customers"] == 2
    assert kpis["total_orders"] == 5
    assert kpis["cities"] == 1


def test_kpis_on_empty_table():
    kpis = compute_kpis(parse_csv("Date,Product,Amount"), DatasetKind.SALES)
    assert kpis["rows"] == 0
    assert kpis["total_sales"] == 0.0
    assert kpis["sales_by_category"] == {}


def test_kpis_count_values_the_validator_accepts():
    table = parse_csv("Date,Product,Amount,Quantity\n2024-01-01,A,12.5usd,2 boxes\n2024-01-02,B,10,1\n")
    assert validate_table(table, DatasetKind.SALES) == []
    kpis = compute_kpis(table, DatasetKind.SALES)
    assert kpis["total_sales"] == 22.5
    assert kpis["units_sold"] == 3


def test_inventory_kpis_read_stock_prefix():
    table = parse_csv("Product,Stock,Price\nA,7 units,2.00\n")
    kpis = compute_kpis(table, DatasetKind.INVENTORY, low_stock_threshold=10)
    assert kpis["total_stock"] == 7
    assert kpis["low_stock_items"] == 1
    assert kpis["inventory_value"] == 14.0
