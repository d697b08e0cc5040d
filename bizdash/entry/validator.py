from __future__ import annotations

from ..ingest.numbers import parse_float, parse_int
from ..models.manual_entry import CATEGORIES, ManualEntryRecord

__all__ = [
    "validate_entry",
]


def validate_entry(record: ManualEntryRecord) -> dict[str, str]:
    """Validate a manual entry draft.

    Every field is checked on every call so all problems can be shown at
    once. Returns field name -> message; an empty dict means valid.
    """
    errors: dict[str, str] = {}

    if not record.product.strip():
        errors["product"] = "Product name is required"

    if not record.category:
        errors["category"] = "Category is required"
    elif record.category not in CATEGORIES:
        errors["category"] = f"Unknown category: {record.category}"

    if not record.amount:
        errors["amount"] = "Amount is required"
    else:
        amount = parse_float(record.amount)
        if amount is None or amount <= 0:
            errors["amount"] = "Amount must be a valid positive number"

    if not record.customer.strip():
        errors["customer"] = "Customer name is required"

    if not record.quantity:
        errors["quantity"] = "Quantity is required"
    else:
        quantity = parse_int(record.quantity)
        if quantity is None or quantity <= 0:
            errors["quantity"] = "Quantity must be a valid positive number"

    if not record.date:
        errors["date"] = "Date is required"

    return errors
