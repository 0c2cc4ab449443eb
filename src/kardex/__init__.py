"""Kardex: stock ledger aggregation, critical-stock alerts and import reconciliation."""

from .imports import reconcile_inventory_rows, reconcile_rows
from .ledger import (
    AggregateEntry,
    Direction,
    MovementRecord,
    OperationKind,
    StockStatus,
    aggregate,
    classify,
    dashboard_stats,
    list_critical,
    windowed_stats,
)

__version__ = "0.1.0"

__all__ = [
    "AggregateEntry",
    "Direction",
    "MovementRecord",
    "OperationKind",
    "StockStatus",
    "aggregate",
    "classify",
    "dashboard_stats",
    "list_critical",
    "reconcile_inventory_rows",
    "reconcile_rows",
    "windowed_stats",
]
