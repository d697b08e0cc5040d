from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Literal

"""Dataset kind inference.

The kind of an upload decides which columns are mandatory. By default it is
guessed from the file name (case-insensitive substring, sales as fallback).
A content-based strategy scores header overlap against each kind's required
columns and only falls back to the file name when nothing overlaps.
"""

__all__ = [
    "DatasetKind",
    "InferenceStrategy",
    "REQUIRED_COLUMNS",
    "infer_dataset_kind",
    "infer_kind_from_headers",
    "required_columns",
    "resolve_dataset_kind",
]

InferenceStrategy = Literal["filename", "content"]


class DatasetKind(Enum):
    SALES = "sales"
    INVENTORY = "inventory"
    CUSTOMERS = "customers"


# declaration order is the order per-row "is required" errors are reported in
REQUIRED_COLUMNS: dict[DatasetKind, tuple[str, ...]] = {
    DatasetKind.SALES: ("Date", "Product", "Amount"),
    DatasetKind.INVENTORY: ("Product", "Stock", "Price"),
    DatasetKind.CUSTOMERS: ("Name", "Email"),
}

# substring checked in this order, first hit wins
_NAME_MARKERS: tuple[tuple[str, DatasetKind], ...] = (
    ("sales", DatasetKind.SALES),
    ("inventory", DatasetKind.INVENTORY),
    ("customer", DatasetKind.CUSTOMERS),
)


def required_columns(kind: DatasetKind) -> tuple[str, ...]:
    return REQUIRED_COLUMNS[kind]


def infer_dataset_kind(file_name: str) -> DatasetKind:
    """Guess the dataset kind from a file name.

    >>> infer_dataset_kind("Q1_Sales_Report.csv")
    <DatasetKind.SALES: 'sales'>
    >>> infer_dataset_kind("random.csv")
    <DatasetKind.SALES: 'sales'>
    """
    lowered = file_name.lower()
    for marker, kind in _NAME_MARKERS:
        if marker in lowered:
            return kind
    return DatasetKind.SALES


def infer_kind_from_headers(headers: Sequence[str]) -> DatasetKind | None:
    """Pick the kind whose required columns are best covered by ``headers``.

    Ranking: covered fraction, then covered count, then enum order.
    Returns None when no required column of any kind is present.
    """
    present = set(headers)
    best: DatasetKind | None = None
    best_score: tuple[float, int] = (0.0, 0)
    for kind in DatasetKind:
        required = REQUIRED_COLUMNS[kind]
        hits = sum(1 for col in required if col in present)
        score = (hits / len(required), hits)
        if hits and score > best_score:
            best, best_score = kind, score
    return best


def resolve_dataset_kind(
    file_name: str,
    headers: Sequence[str] = (),
    explicit: DatasetKind | str | None = None,
    strategy: InferenceStrategy = "filename",
) -> DatasetKind:
    """Decide the kind of an upload.

    An explicit choice always wins. With strategy "content" the headers are
    scored first; the file-name heuristic is the last resort.
    """
    if explicit is not None:
        return explicit if isinstance(explicit, DatasetKind) else DatasetKind(explicit)
    if strategy == "content":
        by_content = infer_kind_from_headers(headers)
        if by_content is not None:
            return by_content
    return infer_dataset_kind(file_name)
