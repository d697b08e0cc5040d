from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date

"""ManualEntryRecord model (one manually entered sale)."""

__all__ = [
    "CATEGORIES",
    "ENTRY_FIELDS",
    "ManualEntryRecord",
]

CATEGORIES = (
    "Electronics",
    "Clothing",
    "Home & Garden",
    "Books",
    "Sports",
    "Beauty",
    "Others",
)


@dataclass
class ManualEntryRecord:
    """Draft or pending sale entry. All values are kept as typed strings."""
    date: str = ""
    product: str = ""
    category: str = ""
    amount: str = ""
    customer: str = ""
    quantity: str = "1"

    @classmethod
    def blank(cls, today: date | None = None) -> ManualEntryRecord:
        """New draft with defaults: today's date and quantity "1"."""
        today = today or date.today()
        return cls(date=today.isoformat())

    def copy(self) -> ManualEntryRecord:
        return ManualEntryRecord(**asdict(self))

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


ENTRY_FIELDS = tuple(f.name for f in fields(ManualEntryRecord))
