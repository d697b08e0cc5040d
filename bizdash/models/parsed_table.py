from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pandas as pd

"""ParsedTable / ParsedRow models.

A ParsedTable is the output of the CSV parser: the header line plus one
ParsedRow per non-blank data line. Row numbering counts the header as row 1,
so the first data row is row 2 (the number shown to users in error lists).
"""

__all__ = [
    "ParsedRow",
    "ParsedTable",
]


@dataclass(frozen=True)
class ParsedRow:
    """Single data row keyed by header name.

    Every header of the owning table is present in ``values``; missing
    trailing cells are stored as empty strings.
    """
    row_index: int  # 1-based, header line = 1
    values: dict[str, str] = field(default_factory=dict)

    def get(self, column: str, default: str | None = None) -> str | None:
        return self.values.get(column, default)

    def __getitem__(self, column: str) -> str:
        return self.values[column]

    def __contains__(self, column: object) -> bool:
        return column in self.values


@dataclass(frozen=True)
class ParsedTable:
    """Headers and rows of a parsed CSV upload.

    Duplicate headers are kept in ``headers``; on lookup by name the later
    duplicate wins.
    """
    headers: list[str]
    rows: list[ParsedRow]

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.headers

    def to_frame(self) -> pd.DataFrame:
        """Render rows as a DataFrame (object dtype, header order, duplicates collapsed)."""
        import pandas as pd

        columns = list(dict.fromkeys(self.headers))
        if not self.rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([r.values for r in self.rows], columns=columns)
