# -*- coding: utf-8 -*-
"""Bulk inventory import: a stock list becomes opening entries.

Each item of the list is booked as one stock entry dated today, carrying
the item's minimum-stock threshold when the sheet has one.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional

from kardex.constants import (
    DEFAULT_LOCATION,
    INVENTORY_EXAMPLE_PREFIX,
    INVENTORY_FIELD_ALIASES,
)
from kardex.imports.coercion import (
    clean_text,
    normalize_code,
    parse_min_stock,
    parse_whole_quantity,
    pick,
)
from kardex.imports.reconciler import (
    REASON_EXAMPLE,
    REASON_MISSING,
    REASON_UNREADABLE,
    ReconcileResult,
)
from kardex.ledger.models import Direction, MovementRecord, Number, OperationKind

logger = logging.getLogger(__name__)

REASON_NON_POSITIVE = "non-positive quantity"


@dataclass(frozen=True)
class InventoryItem:
    """One line of a stock list."""

    code: str
    name: str
    quantity: int
    location: str
    address: Optional[str] = None
    min_stock: Optional[Number] = None


def is_inventory_example(code: str) -> bool:
    return code.upper().startswith(INVENTORY_EXAMPLE_PREFIX)


def reconcile_inventory_rows(
    raw_rows: Iterable[Any],
    default_location: str = DEFAULT_LOCATION,
) -> ReconcileResult[InventoryItem]:
    """Validate stock-list rows.

    Quantities are rounded half-up to whole units. Rows whose quantity
    ends up zero are skipped, since an opening entry of nothing carries no
    information.
    """
    result: ReconcileResult[InventoryItem] = ReconcileResult()
    aliases = INVENTORY_FIELD_ALIASES

    for row_number, row in enumerate(raw_rows, start=1):
        if not isinstance(row, Mapping):
            result.reject(row_number, REASON_UNREADABLE)
            continue

        code = normalize_code(pick(row, aliases["code"]))
        name = clean_text(pick(row, aliases["name"]))
        if not code or not name:
            result.reject(row_number, REASON_MISSING, code)
            continue
        if is_inventory_example(code):
            result.reject(row_number, REASON_EXAMPLE, code)
            continue

        quantity = parse_whole_quantity(pick(row, aliases["quantity"]))
        if quantity <= 0:
            result.reject(row_number, REASON_NON_POSITIVE, code)
            continue

        result.accepted.append(
            InventoryItem(
                code=code,
                name=name,
                quantity=quantity,
                location=clean_text(pick(row, aliases["location"])) or default_location,
                address=clean_text(pick(row, aliases["address"])) or None,
                min_stock=parse_min_stock(pick(row, aliases["min_stock"])),
            )
        )

    logger.info(f"Inventory import: {result.summary()}")
    return result


def build_inventory_movements(
    items: Iterable[InventoryItem],
    today: Optional[date] = None,
    responsible: Optional[str] = None,
) -> List[MovementRecord]:
    """Turn stock-list items into entry records dated today."""
    today = today or date.today()
    return [
        MovementRecord(
            id=str(uuid.uuid4()),
            date=today,
            code=item.code,
            name=item.name,
            quantity=item.quantity,
            direction=Direction.IN,
            operation_kind=OperationKind.MOVEMENT,
            location=item.location,
            address=item.address,
            responsible=responsible or None,
            min_stock=item.min_stock,
        )
        for item in items
        if item.quantity > 0
    ]
