# -*- coding: utf-8 -*-
"""Fold the movement history into per-item balances.

Balances are always computed over the full history. Display fields (name,
address, location) come from the most recently created record, and the
minimum-stock threshold from the most recent record that carries a positive
one, so the result does not depend on the order records arrive in.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from kardex.ledger.models import (
    AggregateEntry,
    CountEvent,
    Direction,
    MovementRecord,
    Number,
    OperationKind,
)

logger = logging.getLogger(__name__)


def _is_newer(incoming: Optional[datetime], reference: Optional[datetime]) -> bool:
    """True when incoming is at least as recent as reference.

    None means "never stored" and is older than any timestamp. Ties go to
    the incoming record, so the later-processed record wins.
    """
    if incoming is None:
        return reference is None
    if reference is None:
        return True
    return incoming >= reference


def aggregate(records: Iterable[MovementRecord]) -> Dict[str, AggregateEntry]:
    """Compute one AggregateEntry per item code.

    Args:
        records: Movement history in any order. Not modified.

    Returns:
        Fresh dict keyed by code.
    """
    aggregates: Dict[str, AggregateEntry] = {}
    min_seen = set()

    for record in records:
        entry = aggregates.get(record.code)
        if entry is None:
            entry = AggregateEntry(
                code=record.code,
                name=record.name,
                address=record.address,
                location=record.location,
                _display_ref=record.created_at,
            )
            aggregates[record.code] = entry
        elif _is_newer(record.created_at, entry._display_ref):
            entry.name = record.name
            entry.address = record.address
            entry.location = record.location
            entry._display_ref = record.created_at

        if record.min_stock is not None and record.min_stock > 0:
            if record.code not in min_seen or _is_newer(record.created_at, entry._min_ref):
                entry.min_stock = record.min_stock
                entry._min_ref = record.created_at
                min_seen.add(record.code)

        if entry.last_date is None or record.date > entry.last_date:
            entry.last_date = record.date

        if record.operation_kind is OperationKind.COUNT:
            entry.count_events += 1
            if entry.last_count_event is None or _is_newer(
                record.created_at, entry._count_ref
            ):
                entry.last_count_event = CountEvent(record.quantity, record.date)
                entry._count_ref = record.created_at
            continue

        if record.direction is Direction.IN:
            entry.total_in += record.quantity
            entry.balance += record.quantity
        else:
            entry.total_out += record.quantity
            entry.balance -= record.quantity

    logger.debug(f"Aggregated {len(aggregates)} items")
    return aggregates


def products_in_stock(aggregates: Dict[str, AggregateEntry]) -> int:
    """Number of items with a positive balance."""
    return sum(1 for entry in aggregates.values() if entry.balance > 0)


def current_balance(
    records: Iterable[MovementRecord],
    code: str,
    exclude_id: Optional[str] = None,
) -> Number:
    """Balance of one item, optionally ignoring the record being edited."""
    code = str(code).strip().upper()
    balance: Number = 0
    for record in records:
        if record.code != code or record.id == exclude_id:
            continue
        balance += record.signed_quantity
    return balance


def latest_record(
    records: Iterable[MovementRecord], code: str
) -> Optional[MovementRecord]:
    """Most recently created record for a code, used to prefill manual entry."""
    code = str(code).strip().upper()
    latest: Optional[MovementRecord] = None
    for record in records:
        if record.code != code:
            continue
        if latest is None or _is_newer(record.created_at, latest.created_at):
            latest = record
    return latest


@dataclass
class LocationBalance:
    """Balance of one item at one location/address."""

    code: str
    name: str
    location: str
    address: Optional[str]
    balance: Number = 0
    min_stock: Number = 0


def _location_allowed(location: str, allowed_locations: Sequence[str]) -> bool:
    if not allowed_locations:
        return True
    return any(code in (location or "") for code in allowed_locations)


def balance_by_location(
    records: Iterable[MovementRecord],
    allowed_locations: Sequence[str] = (),
) -> List[LocationBalance]:
    """Balance per (code, location, address), sorted by item name.

    Counts are ignored. When allowed_locations is set, only locations
    containing one of those codes are kept.
    """
    buckets: Dict[Tuple[str, str, Optional[str]], LocationBalance] = {}
    for record in records:
        if record.operation_kind is not OperationKind.MOVEMENT:
            continue
        if not _location_allowed(record.location, allowed_locations):
            continue

        key = (record.code, record.location, record.address or None)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = LocationBalance(
                code=record.code,
                name=record.name,
                location=record.location,
                address=record.address or None,
            )
            buckets[key] = bucket

        bucket.balance += record.signed_quantity
        if record.min_stock and record.min_stock > bucket.min_stock:
            bucket.min_stock = record.min_stock

    return sorted(buckets.values(), key=lambda b: (b.name, b.code, b.location))
