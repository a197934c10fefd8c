"""
flatstore - Custom Exceptions.

Centralized error taxonomy for the table store. Every error carries a stable
``code`` so host applications can branch on it without matching messages.
"""

from pathlib import Path
from typing import Any


class FlatStoreException(Exception):
    """Base exception for flatstore."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidPathError(FlatStoreException):
    """Raised when the store is constructed without a usable path."""

    def __init__(self, message: str = "Filename can not be empty"):
        super().__init__(
            code="INVALID_PATH",
            message=message,
        )


class StoreFileNotFoundError(FlatStoreException, FileNotFoundError):
    """Raised when nothing exists at the given path at construction time."""

    def __init__(self, path: str | Path):
        super().__init__(
            code="FILE_NOT_FOUND",
            message=f"Can't load file: {path}",
            details={"path": str(path)},
        )
        self.filename = str(path)


class LoadError(FlatStoreException):
    """Raised when the document cannot be read or is not a valid table document."""

    def __init__(self, path: str | Path, reason: str):
        super().__init__(
            code="LOAD_FAILED",
            message=f"Can't load file: {path}, {reason}",
            details={"path": str(path), "reason": reason},
        )


class UnknownTableError(FlatStoreException):
    """Raised when a table identifier has no table slot in the document."""

    def __init__(self, table: Any):
        super().__init__(
            code="UNKNOWN_TABLE",
            message=f"Invalid table identifier {table}",
            details={"table": table},
        )


class NoMatchError(FlatStoreException):
    """Raised when an update predicate matches zero records."""

    def __init__(self, table: Any, key: str, value: Any):
        super().__init__(
            code="NO_MATCH",
            message=f"No matching data was found in {table}",
            details={"table": table, "key": key, "value": value},
        )


class InvalidRecordError(FlatStoreException):
    """Raised when a value to be stored is not a mapping or not plain JSON."""

    def __init__(self, value: Any, reason: str | None = None):
        super().__init__(
            code="INVALID_RECORD",
            message=reason or f"Record must be a mapping, got {type(value).__name__}",
            details={"type": type(value).__name__},
        )


class PersistError(FlatStoreException):
    """Raised (through the completion future) when a write-back fails."""

    def __init__(self, path: str | Path, reason: str):
        super().__init__(
            code="PERSIST_FAILED",
            message=f"Failed to save {path}: {reason}",
            details={"path": str(path), "reason": reason},
        )
