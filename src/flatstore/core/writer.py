"""
flatstore Core - Background writer.

Runs document writes off the caller's thread and hands back a
``concurrent.futures.Future`` per write. A single worker thread keeps writes
in submission order, so the last submitted snapshot is the one left on disk.
"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from flatstore.core.persistence import write_document
from flatstore.exceptions import PersistError
from flatstore.observability.metrics import StoreMetrics

logger = logging.getLogger(__name__)


class PersistWriter:
    """Serial, fire-and-forget writer for one document path."""

    def __init__(self, path: Path, metrics: StoreMetrics, encoding: str = "utf-8", atomic: bool = True):
        self._path = path
        self._metrics = metrics
        self._encoding = encoding
        self._atomic = atomic
        self._lock = threading.Lock()
        self._pending: list[Future] = []
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="flatstore-writer")

    def submit(self, payload: str) -> Future:
        """Queue ``payload`` to replace the document; returns its completion future."""
        future = self._executor.submit(self._write, payload)
        with self._lock:
            self._pending.append(future)
        future.add_done_callback(self._forget_if_ok)
        return future

    def _forget_if_ok(self, future: Future) -> None:
        # failed writes stay until flush() reports them
        if future.cancelled() or future.exception() is None:
            with self._lock:
                if future in self._pending:
                    self._pending.remove(future)

    def flush(self, timeout: float | None = None) -> None:
        """
        Wait for every write submitted so far.

        Raises:
            TimeoutError: If writes are still running after ``timeout`` seconds.
            PersistError: The first failure among the awaited writes.
        """
        with self._lock:
            pending = list(self._pending)

        _, not_done = wait(pending, timeout=timeout)
        if not_done:
            raise TimeoutError(f"{len(not_done)} pending write(s) to {self._path}")

        with self._lock:
            reported = set(pending)
            self._pending = [f for f in self._pending if f not in reported]

        for future in pending:
            if future.done() and future.exception() is not None:
                raise future.exception()

    def _write(self, payload: str) -> None:
        started = time.perf_counter()
        try:
            write_document(self._path, payload, encoding=self._encoding, atomic=self._atomic)
        except PersistError as e:
            self._metrics.record_persist_error(str(self._path), e.code)
            logger.error(e.message)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        self._metrics.record_persist_latency(str(self._path), elapsed_ms)
        logger.info(f"Data saved to {self._path}")
