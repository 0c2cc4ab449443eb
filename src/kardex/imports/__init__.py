"""Spreadsheet import: loading, coercion and row reconciliation."""

from .inventory import InventoryItem, build_inventory_movements, reconcile_inventory_rows
from .loader import read_rows
from .reconciler import ReconcileResult, RowRejection, reconcile_rows

__all__ = [
    "InventoryItem",
    "ReconcileResult",
    "RowRejection",
    "build_inventory_movements",
    "read_rows",
    "reconcile_inventory_rows",
    "reconcile_rows",
]
