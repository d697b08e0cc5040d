from __future__ import annotations

import logging
from pathlib import Path

from ..ingest.schema import DatasetKind

"""Sample CSV templates offered for download.

Static fixtures, one per dataset kind. They are not derived from uploaded
data and always pass validation for their own kind.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "SAMPLE_TEMPLATES",
    "template_csv",
    "template_filename",
    "write_templates",
]

SAMPLE_TEMPLATES: dict[DatasetKind, list[list[str]]] = {
    DatasetKind.SALES: [
        ["Date", "Product", "Category", "Amount", "Customer", "Quantity"],
        ["2024-01-15", "iPhone 13", "Electronics", "999.00", "John Doe", "1"],
        ["2024-01-16", "MacBook Pro", "Electronics", "2499.00", "Jane Smith", "1"],
        ["2024-01-17", "AirPods", "Electronics", "199.00", "Bob Johnson", "2"],
    ],
    DatasetKind.INVENTORY: [
        ["Product", "Category", "Stock", "Price", "Supplier", "SKU"],
        ["iPhone 13", "Electronics", "50", "999.00", "Apple Inc", "IP13-001"],
        ["MacBook Pro", "Electronics", "25", "2499.00", "Apple Inc", "MBP-001"],
        ["AirPods", "Electronics", "100", "199.00", "Apple Inc", "AP-001"],
    ],
    DatasetKind.CUSTOMERS: [
        ["Name", "Email", "Phone", "City", "Total Orders", "Last Purchase"],
        ["John Doe", "john@example.com", "+1234567890", "New York", "5", "2024-01-15"],
        ["Jane Smith", "jane@example.com", "+1234567891", "Los Angeles", "3", "2024-01-16"],
        ["Bob Johnson", "bob@example.com", "+1234567892", "Chicago", "8", "2024-01-17"],
    ],
}


def template_filename(kind: DatasetKind) -> str:
    return f"sample_{kind.value}_data.csv"


def template_csv(kind: DatasetKind) -> str:
    """Comma-join each row, newline-join the rows (no trailing newline)."""
    return "\n".join(",".join(row) for row in SAMPLE_TEMPLATES[kind])


def write_templates(directory: Path, kinds: list[DatasetKind] | None = None) -> list[Path]:
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for kind in kinds or list(DatasetKind):
        path = directory / template_filename(kind)
        path.write_text(template_csv(kind), encoding="utf-8")
        logger.info(f"Sample {kind.value} CSV written: {path}")
        written.append(path)
    return written
