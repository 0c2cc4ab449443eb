"""Exception types raised by the ledger.

Row-level import problems are never raised; they are counted and reported
on the reconcile result. These exceptions cover caller mistakes and
collaborator failures.
"""

from typing import Any, Dict, Optional


class KardexError(Exception):
    """Base exception for the ledger."""

    def __init__(
        self,
        message: str,
        code: str = "KARDEX_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigError(KardexError):
    """Invalid value in kardex.toml."""

    def __init__(self, message: str, key: Optional[str] = None):
        details = {"key": key} if key else {}
        super().__init__(message, "CONFIG_ERROR", details)


class StorageError(KardexError):
    """The storage collaborator rejected an operation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STORAGE_ERROR", details)


class DuplicateKeyError(KardexError):
    """Manual entry collides with an existing record on a business key."""

    def __init__(self, key: str, value: Any, existing_id: str):
        message = f"A record with {key}={value!r} already exists (id {existing_id})"
        super().__init__(
            message,
            "DUPLICATE_KEY",
            {"key": key, "value": value, "existing_id": existing_id},
        )


class ImportFileError(KardexError):
    """Spreadsheet could not be read."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path else {}
        super().__init__(message, "IMPORT_FILE_ERROR", details)
