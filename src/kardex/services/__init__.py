"""Async services over the storage collaborator."""

from .ingestion import IngestionReport, insert_in_batches
from .ledger import ImportOutcome, LedgerService, LedgerSummary, find_duplicate

__all__ = [
    "ImportOutcome",
    "IngestionReport",
    "LedgerService",
    "LedgerSummary",
    "find_duplicate",
    "insert_in_batches",
]
