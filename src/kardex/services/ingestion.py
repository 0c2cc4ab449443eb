# -*- coding: utf-8 -*-
"""Batched concurrent insertion of reconciled records.

Records are submitted in fixed-size batches. Inserts inside a batch run
concurrently and each one succeeds or fails on its own; the next batch
starts only after the whole batch has settled. Nothing is rolled back: the
ledger keeps whatever got through.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tqdm import tqdm

from kardex.constants import DEFAULT_BATCH_SIZE
from kardex.ledger.models import MovementRecord
from kardex.storage.base import MovementStore

logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    inserted: List[MovementRecord] = field(default_factory=list)
    failed: List[MovementRecord] = field(default_factory=list)
    batches_completed: int = 0
    cancelled: bool = False

    @property
    def inserted_count(self) -> int:
        return len(self.inserted)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


def chunked(records: Sequence[MovementRecord], size: int) -> List[Sequence[MovementRecord]]:
    return [records[i : i + size] for i in range(0, len(records), size)]


async def insert_in_batches(
    store: MovementStore,
    records: Sequence[MovementRecord],
    batch_size: int = DEFAULT_BATCH_SIZE,
    cancel_event: Optional[asyncio.Event] = None,
    show_progress: bool = False,
) -> IngestionReport:
    """Insert records into the store, one concurrent batch at a time.

    Args:
        store: Storage collaborator.
        records: Records to insert.
        batch_size: Number of concurrent inserts per batch.
        cancel_event: When set, no further batch is started. The batch in
            flight always completes.
        show_progress: Display a tqdm progress bar.

    Returns:
        IngestionReport with stored records (created_at assigned) and failures.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    report = IngestionReport()
    records = list(records)
    batches = chunked(records, batch_size)

    logger.info("=" * 70)
    logger.info(f"Inserting {len(records)} records in {len(batches)} batches of {batch_size}")
    logger.info("=" * 70)

    with tqdm(total=len(records), desc="Inserting", disable=not show_progress) as progress:
        for batch_number, batch in enumerate(batches, start=1):
            if cancel_event is not None and cancel_event.is_set():
                report.cancelled = True
                logger.warning(
                    f"Insertion cancelled before batch {batch_number}/{len(batches)}"
                )
                break

            results = await asyncio.gather(
                *(store.insert_movement(record) for record in batch),
                return_exceptions=True,
            )

            for record, result in zip(batch, results):
                if isinstance(result, BaseException):
                    logger.error(f"Insert failed for {record.code} ({record.id}): {result}")
                    report.failed.append(record)
                elif result is None:
                    logger.error(f"Insert rejected for {record.code} ({record.id})")
                    report.failed.append(record)
                else:
                    report.inserted.append(result)

            report.batches_completed += 1
            progress.update(len(batch))

    logger.info(
        f"Inserted {report.inserted_count}, failed {report.failed_count}, "
        f"batches {report.batches_completed}/{len(batches)}"
    )
    return report
