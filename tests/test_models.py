"""Tests for ledger record types."""

from datetime import date, datetime

import pytest

from kardex.ledger.models import Direction, MovementRecord, OperationKind


def test_code_is_normalized():
    """Codes are trimmed and uppercased on construction."""
    record = MovementRecord(id="1", date=date(2024, 1, 1), code="  ab-12 ", name=" Bolt ")
    assert record.code == "AB-12"
    assert record.name == "Bolt"


def test_defaults_to_movement_in():
    """Absent kind and direction mean a stock entry."""
    record = MovementRecord(id="1", date=date(2024, 1, 1), code="A", name="A")
    assert record.operation_kind is OperationKind.MOVEMENT
    assert record.direction is Direction.IN


def test_string_enums_are_accepted():
    """Enum fields accept their string values."""
    record = MovementRecord(
        id="1", date=date(2024, 1, 1), code="A", name="A", direction="out", operation_kind="count"
    )
    assert record.direction is Direction.OUT
    assert record.operation_kind is OperationKind.COUNT


def test_datetime_date_is_truncated():
    """A datetime passed as date keeps only the calendar day."""
    record = MovementRecord(id="1", date=datetime(2024, 5, 2, 13, 30), code="A", name="A")
    assert record.date == date(2024, 5, 2)


def test_iso_string_date_is_parsed():
    record = MovementRecord(id="1", date="2024-02-01", code="A", name="A")
    assert record.date == date(2024, 2, 1)


@pytest.mark.parametrize("value", ["01/02/2024", 45000, None])
def test_invalid_date_rejected(value):
    """Only dates, datetimes and ISO strings are accepted."""
    with pytest.raises(ValueError):
        MovementRecord(id="1", date=value, code="A", name="A")


def test_with_changes_parses_string_date(make_record):
    updated = make_record(date=date(2024, 1, 1)).with_changes(date="2024-03-10")
    assert updated.date == date(2024, 3, 10)


@pytest.mark.parametrize("code", ["", "   ", None])
def test_empty_code_rejected(code):
    """A record without code cannot be built."""
    with pytest.raises(ValueError, match="code"):
        MovementRecord(id="1", date=date(2024, 1, 1), code=code, name="A")


def test_negative_quantity_rejected():
    """Quantities are clamped at ingestion, so a negative one is a bug."""
    with pytest.raises(ValueError, match="negative"):
        MovementRecord(id="1", date=date(2024, 1, 1), code="A", name="A", quantity=-1)


def test_non_numeric_quantity_rejected():
    with pytest.raises(ValueError, match="number"):
        MovementRecord(id="1", date=date(2024, 1, 1), code="A", name="A", quantity="5")


def test_signed_quantity(make_record):
    """Entries add, exits subtract and counts contribute nothing."""
    assert make_record(quantity=5, direction="IN").signed_quantity == 5
    assert make_record(quantity=5, direction="OUT").signed_quantity == -5
    assert make_record(quantity=5, kind="COUNT").signed_quantity == 0


def test_with_changes_preserves_identity(make_record):
    """Updates replace fields but keep id and created_at."""
    record = make_record(quantity=5)
    changed = record.with_changes(id="other", quantity=8, code="y9", created_at=None)
    assert changed.id == record.id
    assert changed.created_at == record.created_at
    assert changed.quantity == 8
    assert changed.code == "Y9"
    assert record.quantity == 5


def test_to_dict(make_record):
    record = make_record(code="A1", quantity=3, direction="OUT", address="B-2")
    data = record.to_dict()
    assert data["code"] == "A1"
    assert data["direction"] == "OUT"
    assert data["operation_kind"] == "MOVEMENT"
    assert data["date"] == "2024-01-01"
    assert data["address"] == "B-2"
