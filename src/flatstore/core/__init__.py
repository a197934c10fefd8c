"""
flatstore Core - Flat-file table store.

Components:
- table_store: TableStore, the load/query/mutate/persist lifecycle
- document: table slot resolution and strict-equality matching
- persistence: whole-document JSON read and atomic write
- writer: background writer returning completion futures
"""

from flatstore.core.document import Record, TableId, strict_equals
from flatstore.core.table_store import TableStore

__all__ = [
    "Record",
    "TableId",
    "TableStore",
    "strict_equals",
]
