# -*- coding: utf-8 -*-
"""Reconcile spreadsheet rows into ledger movement records.

Rows come from a template download or from any spreadsheet with roughly
the same headers (Portuguese or English, any case). Each row is accepted
or rejected on its own; one bad row never stops the import.

Rejection reasons:
- "missing code or name": neither alias set resolved to a value
- "example row": the template's example line was left in the sheet
- "unreadable row": the row is not a header -> value mapping
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Tuple, TypeVar

from kardex.constants import (
    BLANK_ID_SENTINEL,
    COUNT_TOKENS,
    DEFAULT_LOCATION,
    EXIT_TOKENS,
    MOVEMENT_EXAMPLE_CODE,
    MOVEMENT_FIELD_ALIASES,
)
from kardex.imports.coercion import (
    clean_text,
    normalize_code,
    parse_date,
    parse_min_stock,
    parse_quantity,
    parse_timestamp,
    pick,
)
from kardex.ledger.models import Direction, MovementRecord, OperationKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

REASON_MISSING = "missing code or name"
REASON_EXAMPLE = "example row"
REASON_UNREADABLE = "unreadable row"


@dataclass(frozen=True)
class RowRejection:
    """A skipped row. row_number is 1-based over the data rows."""

    row_number: int
    reason: str
    code: str = ""


@dataclass
class ReconcileResult(Generic[T]):
    accepted: List[T] = field(default_factory=list)
    rejections: List[RowRejection] = field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def rejected_count(self) -> int:
        return len(self.rejections)

    def summary(self) -> str:
        return f"{self.accepted_count} imported, {self.rejected_count} skipped"

    def reject(self, row_number: int, reason: str, code: str = "") -> None:
        self.rejections.append(RowRejection(row_number, reason, code))
        logger.warning(f"Row {row_number} skipped: {reason}" + (f" ({code})" if code else ""))


def classify_type(raw_type: Any) -> Tuple[OperationKind, Direction]:
    """Map the free-text type column to (operation kind, direction).

    Counts are recognized first; anything that does not look like an exit
    is an entry, including a missing value.
    """
    token = clean_text(raw_type).upper()
    if any(t in token for t in COUNT_TOKENS):
        return OperationKind.COUNT, Direction.IN
    if any(t in token for t in EXIT_TOKENS):
        return OperationKind.MOVEMENT, Direction.OUT
    return OperationKind.MOVEMENT, Direction.IN


def resolve_id(raw_id: Any) -> str:
    """Keep a real id from the sheet, otherwise mint a new one."""
    text = clean_text(raw_id)
    if not text or text == BLANK_ID_SENTINEL:
        return str(uuid.uuid4())
    return text


def is_movement_example(code: str) -> bool:
    return code.upper() == MOVEMENT_EXAMPLE_CODE


def reconcile_row(
    row: Mapping[str, Any],
    today: date,
    default_location: str = DEFAULT_LOCATION,
    aliases: Optional[Dict[str, tuple]] = None,
) -> MovementRecord:
    """Build a record from one row that already passed validation."""
    aliases = aliases or MOVEMENT_FIELD_ALIASES
    operation_kind, direction = classify_type(pick(row, aliases["type"]))

    return MovementRecord(
        id=resolve_id(pick(row, aliases["id"])),
        date=parse_date(pick(row, aliases["date"]), today),
        code=normalize_code(pick(row, aliases["code"])),
        name=clean_text(pick(row, aliases["name"])),
        quantity=parse_quantity(pick(row, aliases["quantity"])),
        direction=direction,
        operation_kind=operation_kind,
        location=clean_text(pick(row, aliases["location"])) or default_location,
        address=clean_text(pick(row, aliases["address"])) or None,
        responsible=clean_text(pick(row, aliases["responsible"])) or None,
        min_stock=parse_min_stock(pick(row, aliases["min_stock"])),
        created_at=parse_timestamp(pick(row, aliases["created_at"])),
    )


def reconcile_rows(
    raw_rows: Iterable[Any],
    today: Optional[date] = None,
    default_location: str = DEFAULT_LOCATION,
    aliases: Optional[Dict[str, tuple]] = None,
) -> ReconcileResult[MovementRecord]:
    """Validate and normalize movement rows.

    Args:
        raw_rows: Header -> value mappings, one per spreadsheet data row.
        today: Date used when a row has no usable date. Defaults to today.
        default_location: Location used when a row has none.
        aliases: Field -> header alias table. Defaults to MOVEMENT_FIELD_ALIASES.

    Returns:
        ReconcileResult with accepted MovementRecords and per-row rejections.
    """
    today = today or date.today()
    aliases = aliases or MOVEMENT_FIELD_ALIASES
    result: ReconcileResult[MovementRecord] = ReconcileResult()

    for row_number, row in enumerate(raw_rows, start=1):
        if not isinstance(row, Mapping):
            result.reject(row_number, REASON_UNREADABLE)
            continue

        code = normalize_code(pick(row, aliases["code"]))
        name = clean_text(pick(row, aliases["name"]))
        if not code or not name:
            result.reject(row_number, REASON_MISSING, code)
            continue
        if is_movement_example(code):
            result.reject(row_number, REASON_EXAMPLE, code)
            continue

        result.accepted.append(reconcile_row(row, today, default_location, aliases))

    logger.info(f"Movement import: {result.summary()}")
    return result
