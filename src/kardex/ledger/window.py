# -*- coding: utf-8 -*-
"""Time-windowed dashboard statistics.

Only the activity counters are windowed. Balances, products in stock and
the critical list always come from the full history, so changing the
window never changes them.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Union

from kardex.constants import DASHBOARD_DAYS
from kardex.ledger.aggregator import aggregate, products_in_stock
from kardex.ledger.classifier import count_critical
from kardex.ledger.models import Direction, MovementRecord, Number, OperationKind

WindowSpec = Optional[Union[int, str]]


@dataclass(frozen=True)
class WindowStats:
    movement_count: int
    in_count: int
    out_count: int


@dataclass(frozen=True)
class DashboardStats:
    products_in_stock: int
    movement_count: int
    in_count: int
    out_count: int
    critical_items: int


@dataclass(frozen=True)
class DailyMovement:
    day: date
    quantity_in: Number
    quantity_out: Number


def parse_window(window: WindowSpec) -> Optional[int]:
    """Turn a window specifier into a number of days, or None for ALL.

    Accepts 7, "7", "7d", "ALL" and None.

    Raises:
        ValueError: If the specifier is not understood.
    """
    if window is None:
        return None
    if isinstance(window, bool):
        raise ValueError(f"Invalid window: {window!r}")
    if isinstance(window, int):
        days = window
    else:
        text = str(window).strip().lower()
        if text in ("", "all"):
            return None
        if text.endswith("d"):
            text = text[:-1]
        try:
            days = int(text)
        except ValueError:
            raise ValueError(f"Invalid window: {window!r}") from None
    if days <= 0:
        raise ValueError(f"Window must be a positive number of days, got {days}")
    return days


def window_threshold(window: WindowSpec, today: Optional[date] = None) -> Optional[date]:
    """First day inside the window, or None when the window is ALL."""
    days = parse_window(window)
    if days is None:
        return None
    today = today or date.today()
    return today - timedelta(days=days)


def filter_by_window(
    records: Iterable[MovementRecord],
    window: WindowSpec,
    today: Optional[date] = None,
) -> List[MovementRecord]:
    """Records dated between the threshold and today, both inclusive."""
    today = today or date.today()
    threshold = window_threshold(window, today)
    if threshold is None:
        return list(records)
    return [r for r in records if threshold <= r.date <= today]


def windowed_stats(
    records: Iterable[MovementRecord],
    window: WindowSpec,
    today: Optional[date] = None,
) -> WindowStats:
    """Activity counters for the window.

    movement_count includes counts; in_count and out_count only look at
    stock movements.
    """
    windowed = filter_by_window(records, window, today)
    movements = [r for r in windowed if r.operation_kind is OperationKind.MOVEMENT]
    return WindowStats(
        movement_count=len(windowed),
        in_count=sum(1 for r in movements if r.direction is Direction.IN),
        out_count=sum(1 for r in movements if r.direction is Direction.OUT),
    )


def dashboard_stats(
    records: Sequence[MovementRecord],
    window: WindowSpec,
    today: Optional[date] = None,
) -> DashboardStats:
    """Windowed counters plus full-history stock figures."""
    aggregates = aggregate(records)
    stats = windowed_stats(records, window, today)
    return DashboardStats(
        products_in_stock=products_in_stock(aggregates),
        movement_count=stats.movement_count,
        in_count=stats.in_count,
        out_count=stats.out_count,
        critical_items=count_critical(aggregates),
    )


def daily_movement_series(
    records: Iterable[MovementRecord],
    today: Optional[date] = None,
    days: int = DASHBOARD_DAYS,
) -> List[DailyMovement]:
    """Summed entry and exit quantities for each of the last `days` days, oldest first."""
    today = today or date.today()
    span = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    totals = {day: [0, 0] for day in span}

    for record in records:
        bucket = totals.get(record.date)
        if bucket is None or record.operation_kind is not OperationKind.MOVEMENT:
            continue
        if record.direction is Direction.IN:
            bucket[0] += record.quantity
        else:
            bucket[1] += record.quantity

    return [DailyMovement(day, totals[day][0], totals[day][1]) for day in span]
