from __future__ import annotations

import copy
import json
import logging
from datetime import date
from pathlib import Path
from collections.abc import Callable
from typing import Any

import pandas as pd

from ..ingest.numbers import parse_float, parse_int
from ..ingest.schema import DatasetKind
from ..models.parsed_table import ParsedTable

"""Dashboard data: sample structure, JSON export, product filter and KPIs.

The sample dashboard is demo data; export serialises it as indented JSON
named analytics-report-YYYY-MM-DD.json. compute_kpis derives the KPI card
figures from a validated upload with pandas.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "SAMPLE_DASHBOARD",
    "compute_kpis",
    "export_dashboard",
    "export_filename",
    "filter_top_products",
    "sample_dashboard",
]

LOW_STOCK_THRESHOLD = 10

SAMPLE_DASHBOARD: dict[str, Any] = {
    "kpis": {
        "totalSales": {"value": 24567, "change": 12.5, "trend": "up"},
        "totalOrders": {"value": 1847, "change": -3.2, "trend": "down"},
        "totalCustomers": {"value": 892, "change": 8.7, "trend": "up"},
        "lowStockItems": {"value": 23, "change": -15.4, "trend": "down"},
    },
    "salesData": [
        {"name": "Mon", "sales": 4000, "orders": 24},
        {"name": "Tue", "sales": 3000, "orders": 18},
        {"name": "Wed", "sales": 5000, "orders": 32},
        {"name": "Thu", "sales": 2780, "orders": 20},
        {"name": "Fri", "sales": 1890, "orders": 15},
        {"name": "Sat", "sales": 6390, "orders": 45},
        {"name": "Sun", "sales": 3490, "orders": 28},
    ],
    "productData": [
        {"name": "Electronics", "value": 35, "color": "#3B82F6"},
        {"name": "Clothing", "value": 25, "color": "#10B981"},
        {"name": "Home & Garden", "value": 20, "color": "#F59E0B"},
        {"name": "Books", "value": 15, "color": "#EF4444"},
        {"name": "Others", "value": 5, "color": "#8B5CF6"},
    ],
    "recentAlerts": [
        {"id": 1, "type": "warning", "message": "Low stock: iPhone 13 Pro (5 units left)", "time": "2 hours ago"},
        {"id": 2, "type": "info", "message": "New customer registered: john@example.com", "time": "4 hours ago"},
        {"id": 3, "type": "success", "message": "Sales target achieved for this week", "time": "1 day ago"},
    ],
    "topProducts": [
        {"name": "iPhone 13 Pro", "sales": 156, "revenue": 155400, "category": "Electronics"},
        {"name": "MacBook Air", "sales": 89, "revenue": 89000, "category": "Electronics"},
        {"name": "AirPods Pro", "sales": 234, "revenue": 58500, "category": "Electronics"},
        {"name": "iPad Mini", "sales": 67, "revenue": 33500, "category": "Electronics"},
        {"name": "Apple Watch", "sales": 123, "revenue": 49200, "category": "Electronics"},
    ],
}


def sample_dashboard() -> dict[str, Any]:
    """Fresh copy of the demo dashboard; callers may mutate it freely."""
    return copy.deepcopy(SAMPLE_DASHBOARD)


def export_filename(today: date | None = None) -> str:
    return f"analytics-report-{(today or date.today()).isoformat()}.json"


def export_dashboard(
    directory: Path, data: dict[str, Any] | None = None, today: date | None = None
) -> Path:
    """Write the dashboard structure as indented JSON and return the file path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)
    payload = data if data is not None else sample_dashboard()
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Dashboard exported: {path}")
    return path


def filter_top_products(
    products: list[dict[str, Any]], search: str = "", category: str = "all"
) -> list[dict[str, Any]]:
    needle = search.lower()
    return [
        p for p in products
        if needle in str(p.get("name", "")).lower()
        and (category == "all" or p.get("category") == category)
    ]


def _numeric(
    df: pd.DataFrame, column: str, parse: Callable[[str], float | int | None] = parse_float
) -> pd.Series:
    """Column read the way the validator reads it (numeric prefix), missing as NaN."""
    if column not in df.columns:
        return pd.Series([float("nan")] * len(df), index=df.index, dtype="float64")
    values = df[column].map(lambda v: parse(v) if isinstance(v, str) and v else None)
    return pd.Series(values, index=df.index, dtype="float64")


def _distinct(df: pd.DataFrame, column: str) -> int:
    if column not in df.columns:
        return 0
    return int(df[column].replace("", pd.NA).nunique())


def compute_kpis(
    table: ParsedTable, kind: DatasetKind, low_stock_threshold: int = LOW_STOCK_THRESHOLD
) -> dict[str, Any]:
    """KPI card figures for a validated upload.

    Cells that do not read as numbers count as missing.
    """
    df = table.to_frame()
    kpis: dict[str, Any] = {"kind": kind.value, "rows": len(df)}

    if kind is DatasetKind.SALES:
        amount = _numeric(df, "Amount")
        kpis["total_sales"] = round(float(amount.sum()), 2)
        kpis["total_orders"] = len(df)
        kpis["units_sold"] = int(_numeric(df, "Quantity", parse_int).fillna(0).sum())
        kpis["total_customers"] = _distinct(df, "Customer")
        if "Category" in df.columns and len(df):
            by_cat = amount.fillna(0).groupby(df["Category"]).sum()
            kpis["sales_by_category"] = {str(k): round(float(v), 2) for k, v in by_cat.items()}
        else:
            kpis["sales_by_category"] = {}
    elif kind is DatasetKind.INVENTORY:
        stock = _numeric(df, "Stock", parse_int)
        price = _numeric(df, "Price")
        kpis["total_products"] = _distinct(df, "Product")
        kpis["total_stock"] = int(stock.fillna(0).sum())
        kpis["low_stock_items"] = int((stock < low_stock_threshold).sum())
        kpis["inventory_value"] = round(float((stock * price).sum()), 2)
    else:
        kpis["total_customers"] = len(df)
        kpis["total_orders"] = int(_numeric(df, "Total Orders", parse_int).fillna(0).sum())
        kpis["cities"] = _distinct(df, "City")
    return kpis
