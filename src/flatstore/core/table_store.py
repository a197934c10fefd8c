"""
flatstore Core - TableStore.

One JSON file used as a local database. The whole document is read on first
use and stays resident; every mutation writes the whole document back through
a background writer and returns the write's completion future.
"""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from concurrent.futures import Future
from pathlib import Path
from threading import RLock
from typing import Any

from flatstore.config import StoreSettings, get_settings
from flatstore.core.document import Document, Record, TableId, check_json_value, matches, resolve_table
from flatstore.core.persistence import read_document, serialize_document
from flatstore.core.writer import PersistWriter
from flatstore.exceptions import (
    InvalidPathError,
    InvalidRecordError,
    LoadError,
    NoMatchError,
    StoreFileNotFoundError,
)
from flatstore.observability.metrics import StoreMetrics, get_metrics_store

logger = logging.getLogger(__name__)


class TableStore:
    """
    Table-scoped reads and writes over a single JSON document.

    Queries return copies, so editing a returned record never bypasses
    persistence. Mutations return a ``Future`` that resolves once the document
    is on disk; a failed write raises ``PersistError`` from ``result()``.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        settings: StoreSettings | None = None,
        metrics: StoreMetrics | None = None,
    ):
        self._path = self._validate_path(path)
        self._settings = settings or get_settings()
        self._metrics = metrics or get_metrics_store()
        self._lock = RLock()
        self._document: Document | None = None
        self._writer = PersistWriter(
            self._path,
            self._metrics,
            encoding=self._settings.encoding,
            atomic=self._settings.atomic_write,
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def loaded(self) -> bool:
        """True once the document has been read from disk."""
        return self._document is not None

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def all(self, table: TableId) -> list[Record]:
        """Return a copy of every record in ``table``, in stored order."""
        with self._lock:
            return copy.deepcopy(self._table(table))

    def find(self, table: TableId, key: str, value: Any) -> Record | None:
        """Return a copy of the first record whose ``key`` equals ``value``, or None."""
        with self._lock:
            for record in self._table(table):
                if matches(record, key, value):
                    return copy.deepcopy(record)
        return None

    def where(self, table: TableId, key: str, value: Any) -> list[Record]:
        """Return copies of all records whose ``key`` equals ``value``."""
        with self._lock:
            return [copy.deepcopy(r) for r in self._table(table) if matches(r, key, value)]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def insert(self, table: TableId, record: Mapping[str, Any]) -> Future:
        """Append ``record`` to ``table`` and persist the document."""
        row = self._copy_record(record)
        with self._lock:
            self._table(table).append(row)
            return self._save()

    def update_row(
        self,
        table: TableId,
        where_key: str,
        where_value: Any,
        field_key: str,
        field_value: Any = None,
    ) -> Future:
        """
        Set ``field_key`` to ``field_value`` on every record matching the predicate.

        Other fields are left as they are. The document is persisted once,
        after all matches are updated.

        Raises:
            InvalidRecordError: If ``field_key`` is not a string or
                ``field_value`` is not plain JSON. Nothing is changed.
            NoMatchError: If no record has ``where_key`` equal to ``where_value``.
        """
        if not isinstance(field_key, str):
            raise InvalidRecordError(field_key, f"field key must be a string, got {field_key!r}")
        check_json_value(field_value, where=f"field {field_key!r}")
        with self._lock:
            rows = self._table(table)
            hits = [r for r in rows if matches(r, where_key, where_value)]
            if not hits:
                raise NoMatchError(table, where_key, where_value)
            for row in hits:
                row[field_key] = copy.deepcopy(field_value)
            logger.debug(f"Updated {len(hits)} row(s) in table {table}")
            return self._save()

    def overwrite_row(
        self,
        table: TableId,
        where_key: str,
        where_value: Any,
        new_record: Mapping[str, Any],
    ) -> Future:
        """
        Replace every record matching the predicate with ``new_record``.

        Fields of the old record that ``new_record`` lacks are dropped.

        Raises:
            NoMatchError: If no record has ``where_key`` equal to ``where_value``.
        """
        replacement = self._copy_record(new_record)
        with self._lock:
            rows = self._table(table)
            positions = [i for i, r in enumerate(rows) if matches(r, where_key, where_value)]
            if not positions:
                raise NoMatchError(table, where_key, where_value)
            for i in positions:
                rows[i] = copy.deepcopy(replacement)
            logger.debug(f"Overwrote {len(positions)} row(s) in table {table}")
            return self._save()

    def flush(self, timeout: float | None = None) -> None:
        """
        Block until every write issued so far is on disk.

        Raises:
            TimeoutError: If writes are still pending after ``timeout`` seconds.
            PersistError: The first failed write since the previous flush.
        """
        self._writer.flush(timeout)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _table(self, table: TableId) -> list[Record]:
        self._load()
        return resolve_table(self._document, table)

    def _load(self) -> None:
        if self._document is not None:
            return
        try:
            document = read_document(self._path, self._settings.encoding)
        except LoadError:
            self._metrics.record_load_error(str(self._path))
            raise
        self._document = document
        self._metrics.record_load(str(self._path))
        logger.debug(f"Loaded {len(document)} table(s) from {self._path}")

    def _save(self) -> Future:
        self._load()
        payload = serialize_document(self._document, self._settings)
        return self._writer.submit(payload)

    @staticmethod
    def _copy_record(record: Any) -> Record:
        if not isinstance(record, Mapping):
            raise InvalidRecordError(record)
        check_json_value(dict(record))
        return copy.deepcopy(dict(record))

    @staticmethod
    def _validate_path(path: str | os.PathLike[str] | None) -> Path:
        if not path:
            raise InvalidPathError()
        resolved = Path(path)
        if not resolved.exists():
            raise StoreFileNotFoundError(path)
        return resolved

    def __repr__(self) -> str:
        state = "loaded" if self.loaded else "unloaded"
        return f"TableStore(path={str(self._path)!r}, {state})"
