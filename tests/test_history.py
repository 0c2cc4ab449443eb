"""Tests for movement history filtering."""

from datetime import date

import pytest

from kardex.ledger.history import (
    HistoryFilter,
    filter_history,
    unique_locations,
    unique_responsibles,
)
from kardex.ledger.models import Direction, OperationKind


@pytest.fixture
def records(make_record):
    return [
        make_record("B2", 5, "IN", name="Parafuso", responsible="Ana", location="01",
                    date=date(2024, 2, 1)),
        make_record("A1", 3, "OUT", name="Porca", responsible="Bruno", location="20",
                    date=date(2024, 2, 10)),
        make_record("A1", 7, kind="COUNT", name="Porca", responsible="Ana", location="20",
                    date=date(2024, 2, 5)),
        make_record("C3", 1, "IN", name="Arruela", location="01", date=date(2024, 3, 1)),
    ]


def test_no_filter_sorts_by_code_then_date(records):
    result = filter_history(records)
    assert [(r.code, r.date.day) for r in result] == [
        ("A1", 5),
        ("A1", 10),
        ("B2", 1),
        ("C3", 1),
    ]


def test_search_matches_code_name_location_and_responsible(records):
    assert {r.code for r in filter_history(records, HistoryFilter(search="porca"))} == {"A1"}
    assert {r.code for r in filter_history(records, HistoryFilter(search="b2"))} == {"B2"}
    assert {r.code for r in filter_history(records, HistoryFilter(search="bruno"))} == {"A1"}


def test_direction_filter_keeps_counts(records):
    """Counts carry a nominal direction and are not filtered by it."""
    result = filter_history(records, HistoryFilter(direction=Direction.OUT))
    assert [(r.code, r.operation_kind) for r in result] == [
        ("A1", OperationKind.COUNT),
        ("A1", OperationKind.MOVEMENT),
    ]


def test_operation_kind_filter(records):
    result = filter_history(records, HistoryFilter(operation_kind=OperationKind.COUNT))
    assert len(result) == 1
    assert result[0].quantity == 7


def test_responsible_location_and_dates(records):
    criteria = HistoryFilter(
        responsible="Ana",
        location="01",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 2, 1),
    )
    result = filter_history(records, criteria)
    assert [r.code for r in result] == ["B2"]

    result = filter_history(records, HistoryFilter(start_date=date(2024, 2, 10)))
    assert [r.code for r in result] == ["A1", "C3"]


def test_unique_choices(records):
    assert unique_responsibles(records) == ["Ana", "Bruno"]
    assert unique_locations(records) == ["01", "20"]
