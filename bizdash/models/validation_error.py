from __future__ import annotations

from dataclasses import asdict, dataclass

__all__ = [
    "STRUCTURAL_ROW",
    "ValidationError",
]

# row value used for errors about the header line (missing column)
STRUCTURAL_ROW = 0


@dataclass(frozen=True)
class ValidationError:
    """One problem found while validating an uploaded table.

    Attributes:
        row: 0 for structural errors, otherwise the row_index of the data row
        column: Offending column name
        message: Human readable description
    """
    row: int
    column: str
    message: str

    @property
    def is_structural(self) -> bool:
        return self.row == STRUCTURAL_ROW

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    def __str__(self) -> str:
        if self.is_structural:
            return self.message
        return f"Row {self.row}, {self.column}: {self.message}"
