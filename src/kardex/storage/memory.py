"""In-memory movement store for development and tests."""

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional

from kardex.ledger.models import MovementRecord
from kardex.storage.base import MovementStore

logger = logging.getLogger(__name__)


class InMemoryMovementStore(MovementStore):
    """Ephemeral store keyed by record id.

    created_at is assigned from a monotonic clock so that two inserts in
    the same instant still get distinct, ordered timestamps.

    Args:
        records: Initial records, stored as-is (their created_at is kept,
            or assigned when missing).
        fail_when: Optional predicate; inserts for which it returns True
            are rejected, to simulate a flaky backend.
    """

    def __init__(
        self,
        records: Iterable[MovementRecord] = (),
        fail_when: Optional[Callable[[MovementRecord], bool]] = None,
    ) -> None:
        self._data: Dict[str, MovementRecord] = {}
        self._last_created: Optional[datetime] = None
        self._fail_when = fail_when
        for record in records:
            if record.created_at is None:
                record = _stamp(record, self._next_timestamp())
            else:
                self._observe(record.created_at)
            self._data[record.id] = record

    def _observe(self, stamp: datetime) -> None:
        if self._last_created is None or stamp > self._last_created:
            self._last_created = stamp

    def _next_timestamp(self) -> datetime:
        now = datetime.now()
        if self._last_created is not None and now <= self._last_created:
            now = self._last_created + timedelta(microseconds=1)
        self._last_created = now
        return now

    async def list_movements(self) -> List[MovementRecord]:
        return list(self._data.values())

    async def insert_movement(self, record: MovementRecord) -> Optional[MovementRecord]:
        if record.id in self._data:
            logger.error(f"InMemoryMovementStore: duplicate id {record.id}")
            return None
        if self._fail_when is not None and self._fail_when(record):
            logger.error(f"InMemoryMovementStore: insert rejected for {record.code}")
            return None
        stored = _stamp(record, self._next_timestamp())
        self._data[stored.id] = stored
        return stored

    async def update_movement(self, record_id: str, fields: Dict[str, Any]) -> bool:
        current = self._data.get(record_id)
        if current is None:
            return False
        try:
            updated = current.with_changes(**fields)
        except (ValueError, TypeError) as e:
            logger.error(f"InMemoryMovementStore: update rejected for {record_id}: {e}")
            return False
        self._data[record_id] = updated
        return True

    async def delete_movement(self, record_id: str) -> bool:
        if record_id in self._data:
            del self._data[record_id]
            return True
        return False

    def __len__(self) -> int:
        return len(self._data)


def _stamp(record: MovementRecord, created_at: datetime) -> MovementRecord:
    return replace(record, created_at=created_at)
