# -*- coding: utf-8 -*-
"""Shared fixtures for the ledger tests."""

import itertools
from datetime import date, datetime, timedelta

import pytest

from kardex.ledger.models import Direction, MovementRecord, OperationKind


@pytest.fixture
def make_record():
    """Factory for stored-looking records with increasing created_at."""
    counter = itertools.count(1)
    base = datetime(2024, 1, 1, 8, 0, 0)

    def _make(code="X101", quantity=10, direction="IN", kind="MOVEMENT", **kwargs):
        n = next(counter)
        kwargs.setdefault("id", f"rec-{n}")
        kwargs.setdefault("date", date(2024, 1, 1))
        kwargs.setdefault("name", f"Item {code}")
        kwargs.setdefault("location", "Geral")
        kwargs.setdefault("created_at", base + timedelta(minutes=n))
        return MovementRecord(
            code=code,
            quantity=quantity,
            direction=Direction(direction),
            operation_kind=OperationKind(kind),
            **kwargs,
        )

    return _make


@pytest.fixture
def today():
    return date(2024, 3, 31)
