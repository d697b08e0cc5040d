from __future__ import annotations

from datetime import date

import pytest

from bizdash.entry.validator import validate_entry
from bizdash.models.manual_entry import ManualEntryRecord


def _valid(**overrides: str) -> ManualEntryRecord:
    values = {
        "date": "2024-01-01",
        "product": "Novel",
        "category": "Books",
        "amount": "10",
        "customer": "X",
        "quantity": "1",
    }
    values.update(overrides)
    return ManualEntryRecord(**values)


def test_valid_record_has_no_errors():
    assert validate_entry(_valid()) == {}


def test_empty_product_only_error():
    errors = validate_entry(_valid(product=""))
    assert errors == {"product": "Product name is required"}


def test_whitespace_product_and_customer():
    errors = validate_entry(_valid(product="   ", customer="\t"))
    assert set(errors) == {"product", "customer"}
    assert errors["customer"] == "Customer name is required"


@pytest.mark.parametrize("amount", ["-5", "0", "abc", "0.0"])
def test_amount_must_be_positive_number(amount: str):
    errors = validate_entry(_valid(amount=amount))
    assert errors == {"amount": "Amount must be a valid positive number"}


def test_small_positive_amount_passes():
    assert validate_entry(_valid(amount="0.01")) == {}


def test_amount_required():
    assert validate_entry(_valid(amount="")) == {"amount": "Amount is required"}


@pytest.mark.parametrize("quantity", ["0", "-1", "many"])
def test_quantity_must_be_positive_integer(quantity: str):
    errors = validate_entry(_valid(quantity=quantity))
    assert errors == {"quantity": "Quantity must be a valid positive number"}


def test_quantity_required():
    assert validate_entry(_valid(quantity="")) == {"quantity": "Quantity is required"}


def test_category_required_and_known():
    assert validate_entry(_valid(category="")) == {"category": "Category is required"}
    assert validate_entry(_valid(category="Toys")) == {"category": "Unknown category: Toys"}


def test_date_required():
    assert validate_entry(_valid(date="")) == {"date": "Date is required"}


def test_all_fields_reported_at_once():
    errors = validate_entry(ManualEntryRecord(date="", quantity=""))
    assert set(errors) == {"date", "product", "category", "amount", "customer", "quantity"}


def test_blank_record_defaults():
    draft = ManualEntryRecord.blank(date(2024, 3, 9))
    assert draft.date == "2024-03-09"
    assert draft.quantity == "1"
    assert draft.product == draft.category == draft.amount == draft.customer == ""


def test_non_ascii_digits_are_not_numbers():
    errors = validate_entry(_valid(amount="٥", quantity="٣"))
    assert errors == {
        "amount": "Amount must be a valid positive number",
        "quantity": "Quantity must be a valid positive number",
    }
