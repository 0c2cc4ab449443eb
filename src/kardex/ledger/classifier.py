"""Stock status of aggregated items."""

from enum import Enum
from typing import Dict, List, Optional, Union

from kardex.ledger.models import AggregateEntry


class StockStatus(Enum):
    """Alert level of an item's balance."""

    NEGATIVE = "NEGATIVE"
    CRITICAL = "CRITICAL"
    OK = "OK"


ALERT_STATUSES = (StockStatus.NEGATIVE, StockStatus.CRITICAL)


def classify(entry: AggregateEntry) -> StockStatus:
    """Classify one item.

    NEGATIVE wins over CRITICAL. An item without a positive threshold is
    never CRITICAL.
    """
    if entry.balance < 0:
        return StockStatus.NEGATIVE
    if entry.min_stock > 0 and entry.balance <= entry.min_stock:
        return StockStatus.CRITICAL
    return StockStatus.OK


def list_critical(aggregates: Dict[str, AggregateEntry]) -> List[AggregateEntry]:
    """Items that need attention (CRITICAL or NEGATIVE), sorted by code."""
    return sorted(
        (entry for entry in aggregates.values() if classify(entry) in ALERT_STATUSES),
        key=lambda entry: entry.code,
    )


def count_critical(aggregates: Dict[str, AggregateEntry]) -> int:
    return len(list_critical(aggregates))


def filter_by_status(
    aggregates: Dict[str, AggregateEntry],
    status: Optional[Union[StockStatus, str]] = None,
) -> List[AggregateEntry]:
    """Entries with the given status, sorted by code. None or "ALL" keeps all."""
    entries = sorted(aggregates.values(), key=lambda entry: entry.code)
    if status is None or status == "ALL":
        return entries
    if isinstance(status, str):
        status = StockStatus(status.upper())
    return [entry for entry in entries if classify(entry) is status]
