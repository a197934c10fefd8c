"""
flatstore - a single JSON file used as a local table store.
"""

from flatstore.core import Record, TableId, TableStore
from flatstore.exceptions import (
    FlatStoreException,
    InvalidPathError,
    InvalidRecordError,
    LoadError,
    NoMatchError,
    PersistError,
    StoreFileNotFoundError,
    UnknownTableError,
)

__version__ = "0.1.0"

__all__ = [
    "FlatStoreException",
    "InvalidPathError",
    "InvalidRecordError",
    "LoadError",
    "NoMatchError",
    "PersistError",
    "Record",
    "StoreFileNotFoundError",
    "TableId",
    "TableStore",
    "UnknownTableError",
    "__version__",
]
