"""Filtering of the movement history for display."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from kardex.ledger.models import Direction, MovementRecord, OperationKind


@dataclass(frozen=True)
class HistoryFilter:
    """Criteria for filter_history. Unset fields match everything."""

    search: str = ""
    direction: Optional[Direction] = None
    operation_kind: Optional[OperationKind] = None
    responsible: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def _matches_search(record: MovementRecord, term: str) -> bool:
    haystack = (
        record.code,
        record.name,
        record.location,
        record.responsible or "",
    )
    return any(term in value.lower() for value in haystack)


def filter_history(
    records: Iterable[MovementRecord],
    criteria: Optional[HistoryFilter] = None,
) -> List[MovementRecord]:
    """Return records matching every criterion, sorted by code then date.

    The direction criterion only applies to stock movements; counts carry
    a nominal direction and are never dropped by it.
    """
    criteria = criteria or HistoryFilter()
    term = criteria.search.strip().lower()
    result = []

    for record in records:
        if term and not _matches_search(record, term):
            continue
        if (
            criteria.direction is not None
            and not record.is_count
            and record.direction is not criteria.direction
        ):
            continue
        if (
            criteria.operation_kind is not None
            and record.operation_kind is not criteria.operation_kind
        ):
            continue
        if criteria.responsible and record.responsible != criteria.responsible:
            continue
        if criteria.location and record.location != criteria.location:
            continue
        if criteria.start_date and record.date < criteria.start_date:
            continue
        if criteria.end_date and record.date > criteria.end_date:
            continue
        result.append(record)

    return sorted(result, key=lambda r: (r.code, r.date))


def unique_responsibles(records: Iterable[MovementRecord]) -> List[str]:
    return sorted({r.responsible for r in records if r.responsible})


def unique_locations(records: Iterable[MovementRecord]) -> List[str]:
    return sorted({r.location for r in records if r.location})
