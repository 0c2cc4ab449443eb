# -*- coding: utf-8 -*-
"""Ledger service: the storage collaborator plus the pure ledger functions.

The service holds no ledger state of its own. Every read goes back to the
store and re-aggregates, so a summary always reflects what was actually
persisted.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from kardex.config import KardexConfig
from kardex.exceptions import DuplicateKeyError, StorageError
from kardex.imports.inventory import build_inventory_movements, reconcile_inventory_rows
from kardex.imports.reconciler import RowRejection, reconcile_rows
from kardex.ledger.aggregator import LocationBalance, aggregate, balance_by_location
from kardex.ledger.classifier import list_critical
from kardex.ledger.models import AggregateEntry, MovementRecord
from kardex.ledger.window import (
    DailyMovement,
    DashboardStats,
    WindowSpec,
    daily_movement_series,
    dashboard_stats,
)
from kardex.services.ingestion import insert_in_batches
from kardex.storage.base import MovementStore

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "date",
        "code",
        "name",
        "quantity",
        "direction",
        "operation_kind",
        "location",
        "address",
        "responsible",
        "min_stock",
    }
)


@dataclass
class ImportOutcome:
    accepted_count: int = 0
    rejected_count: int = 0
    inserted_count: int = 0
    failed_count: int = 0
    cancelled: bool = False
    rejections: List[RowRejection] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"{self.inserted_count} imported, {self.rejected_count} skipped"


@dataclass
class LedgerSummary:
    aggregates: Dict[str, AggregateEntry]
    stats: DashboardStats
    critical: List[AggregateEntry]
    daily: List[DailyMovement]


def find_duplicate(
    records: Iterable[MovementRecord],
    candidate: MovementRecord,
    key: str = "code",
) -> Optional[MovementRecord]:
    """Existing record with the same business key and a different id."""
    value = getattr(candidate, key)
    for record in records:
        if record.id != candidate.id and getattr(record, key) == value:
            return record
    return None


class LedgerService:
    """Operations over a movement store.

    Args:
        store: Storage collaborator.
        config: Resolved configuration; defaults are used when omitted.
    """

    def __init__(self, store: MovementStore, config: Optional[KardexConfig] = None):
        self.store = store
        self.config = config or KardexConfig()

    async def snapshot(self) -> Dict[str, AggregateEntry]:
        return aggregate(await self.store.list_movements())

    async def summary(
        self, window: WindowSpec = None, today: Optional[date] = None
    ) -> LedgerSummary:
        records = await self.store.list_movements()
        aggregates = aggregate(records)
        return LedgerSummary(
            aggregates=aggregates,
            stats=dashboard_stats(records, window, today),
            critical=list_critical(aggregates),
            daily=daily_movement_series(records, today),
        )

    async def location_balances(self) -> List[LocationBalance]:
        """Per-location balances restricted to the configured locations."""
        return balance_by_location(
            await self.store.list_movements(), self.config.allowed_locations
        )

    async def record_movement(
        self, record: MovementRecord, unique_on: Optional[str] = None
    ) -> MovementRecord:
        """Store one manually entered record.

        Args:
            record: Record to store.
            unique_on: Field that must not repeat across records, if any.

        Raises:
            DuplicateKeyError: If unique_on is set and another record has the same value.
            StorageError: If the store rejects the insert.
        """
        if unique_on:
            existing = find_duplicate(await self.store.list_movements(), record, unique_on)
            if existing is not None:
                raise DuplicateKeyError(unique_on, getattr(record, unique_on), existing.id)

        stored = await self.store.insert_movement(record)
        if stored is None:
            raise StorageError(f"Could not store movement {record.id}", {"code": record.code})
        logger.info(f"Recorded {stored.operation_kind.value} {stored.code} qty {stored.quantity}")
        return stored

    async def update_movement(self, record_id: str, **fields: Any) -> bool:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")
        updated = await self.store.update_movement(record_id, fields)
        if not updated:
            logger.error(f"Update failed for movement {record_id}")
        return updated

    async def delete_movement(self, record_id: str) -> bool:
        deleted = await self.store.delete_movement(record_id)
        if not deleted:
            logger.error(f"Delete failed for movement {record_id}")
        return deleted

    async def import_movements(
        self,
        rows: Iterable[Any],
        today: Optional[date] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ImportOutcome:
        """Reconcile movement rows and insert the accepted records."""
        result = reconcile_rows(rows, today, self.config.default_location)
        return await self._ingest(result.accepted, result, cancel_event)

    async def import_inventory(
        self,
        rows: Iterable[Any],
        responsible: Optional[str] = None,
        today: Optional[date] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ImportOutcome:
        """Reconcile a stock list and book each item as an entry dated today."""
        result = reconcile_inventory_rows(rows, self.config.default_location)
        records = build_inventory_movements(result.accepted, today, responsible)
        return await self._ingest(records, result, cancel_event)

    async def _ingest(self, records, result, cancel_event) -> ImportOutcome:
        report = await insert_in_batches(
            self.store,
            records,
            batch_size=self.config.batch_size,
            cancel_event=cancel_event,
            show_progress=self.config.show_progress,
        )
        outcome = ImportOutcome(
            accepted_count=result.accepted_count,
            rejected_count=result.rejected_count,
            inserted_count=report.inserted_count,
            failed_count=report.failed_count,
            cancelled=report.cancelled,
            rejections=list(result.rejections),
        )
        logger.info(outcome.message)
        return outcome
