# -*- coding: utf-8 -*-
"""Ledger record types.

A MovementRecord is one line of the Kardex: a stock entry, a stock exit, or
a physical count. Counts are informational and never move the balance.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

Number = Union[int, float]


class OperationKind(Enum):
    """Whether a record moves stock or only reports a count."""

    MOVEMENT = "MOVEMENT"
    COUNT = "COUNT"


class Direction(Enum):
    """Stock direction of a MOVEMENT record."""

    IN = "IN"
    OUT = "OUT"


@dataclass(frozen=True)
class MovementRecord:
    """One immutable ledger entry.

    created_at is assigned by the store on insert. Records that were never
    stored carry None and sort before every stored record.
    """

    id: str
    date: date
    code: str
    name: str
    quantity: Number = 0
    direction: Direction = Direction.IN
    operation_kind: OperationKind = OperationKind.MOVEMENT
    location: str = ""
    address: Optional[str] = None
    responsible: Optional[str] = None
    min_stock: Optional[Number] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        code = str(self.code or "").strip().upper()
        if not code:
            raise ValueError("MovementRecord.code must not be empty")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "name", str(self.name or "").strip())

        if isinstance(self.direction, str):
            object.__setattr__(self, "direction", Direction(self.direction.upper()))
        if isinstance(self.operation_kind, str):
            object.__setattr__(
                self, "operation_kind", OperationKind(self.operation_kind.upper())
            )
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, (int, float)):
            raise ValueError(f"quantity must be a number, got {self.quantity!r}")
        if self.quantity < 0:
            raise ValueError(f"quantity must not be negative, got {self.quantity}")
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        elif isinstance(self.date, str):
            object.__setattr__(self, "date", date.fromisoformat(self.date.strip()))
        elif not isinstance(self.date, date):
            raise ValueError(f"date must be a date, got {self.date!r}")

    @property
    def is_count(self) -> bool:
        return self.operation_kind is OperationKind.COUNT

    @property
    def signed_quantity(self) -> Number:
        """Contribution to the balance: +qty, -qty, or 0 for counts."""
        if self.is_count:
            return 0
        return self.quantity if self.direction is Direction.IN else -self.quantity

    def with_changes(self, **changes: Any) -> "MovementRecord":
        """Copy with replaced fields. id and created_at are preserved."""
        changes.pop("id", None)
        changes.pop("created_at", None)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "code": self.code,
            "name": self.name,
            "quantity": self.quantity,
            "direction": self.direction.value,
            "operation_kind": self.operation_kind.value,
            "location": self.location,
            "address": self.address,
            "responsible": self.responsible,
            "min_stock": self.min_stock,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class CountEvent:
    """Latest physical count seen for an item."""

    quantity: Number
    date: date


@dataclass
class AggregateEntry:
    """Per-item state derived from the full movement history."""

    code: str
    name: str = ""
    address: Optional[str] = None
    location: str = ""
    total_in: Number = 0
    total_out: Number = 0
    balance: Number = 0
    min_stock: Number = 0
    count_events: int = 0
    last_count_event: Optional[CountEvent] = None
    last_date: Optional[date] = None
    # recency markers, internal to the fold
    _display_ref: Optional[datetime] = field(default=None, repr=False, compare=False)
    _min_ref: Optional[datetime] = field(default=None, repr=False, compare=False)
    _count_ref: Optional[datetime] = field(default=None, repr=False, compare=False)
