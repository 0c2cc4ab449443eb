"""Storage collaborator interface.

The ledger core never talks to a database directly. A store returns
explicit success signals (None/False) instead of raising for ordinary
rejections; unexpected exceptions are treated as failures by the caller.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from kardex.ledger.models import MovementRecord


class MovementStore(ABC):
    """Abstract movement store."""

    @abstractmethod
    async def list_movements(self) -> List[MovementRecord]:
        """Full movement history, in any order."""

    @abstractmethod
    async def insert_movement(self, record: MovementRecord) -> Optional[MovementRecord]:
        """Persist a record.

        Returns:
            The stored record with created_at assigned, or None on failure.
        """

    @abstractmethod
    async def update_movement(self, record_id: str, fields: Dict[str, Any]) -> bool:
        """Replace fields of an existing record. id and created_at are kept."""

    @abstractmethod
    async def delete_movement(self, record_id: str) -> bool:
        """Remove a record. Returns False when it does not exist."""
