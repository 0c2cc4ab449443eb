"""Ledger model and pure aggregation functions."""

from .aggregator import (
    LocationBalance,
    aggregate,
    balance_by_location,
    current_balance,
    latest_record,
    products_in_stock,
)
from .classifier import (
    StockStatus,
    classify,
    count_critical,
    filter_by_status,
    list_critical,
)
from .history import HistoryFilter, filter_history
from .models import (
    AggregateEntry,
    CountEvent,
    Direction,
    MovementRecord,
    OperationKind,
)
from .window import (
    DashboardStats,
    WindowStats,
    daily_movement_series,
    dashboard_stats,
    filter_by_window,
    parse_window,
    windowed_stats,
)

__all__ = [
    "AggregateEntry",
    "CountEvent",
    "DashboardStats",
    "Direction",
    "HistoryFilter",
    "LocationBalance",
    "MovementRecord",
    "OperationKind",
    "StockStatus",
    "WindowStats",
    "aggregate",
    "balance_by_location",
    "classify",
    "count_critical",
    "current_balance",
    "daily_movement_series",
    "dashboard_stats",
    "filter_by_status",
    "filter_by_window",
    "filter_history",
    "latest_record",
    "list_critical",
    "parse_window",
    "products_in_stock",
    "windowed_stats",
]
