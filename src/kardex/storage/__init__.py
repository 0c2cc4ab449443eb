"""Storage collaborator port and the in-memory adapter."""

from .base import MovementStore
from .memory import InMemoryMovementStore

__all__ = ["InMemoryMovementStore", "MovementStore"]
