"""
flatstore Metrics Store.

In-process counters for each document a store has opened:
- loads and load failures
- completed saves with a window of recent save durations
- failed saves by error code (FlatStoreException.code)

Thread-safe via locks. Singleton pattern for global access.
"""

from __future__ import annotations

import statistics
import threading
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

# Durations kept per document for the summary
RECENT_SAVES = 256


@dataclass
class DocumentStats:
    """Load and save counters for one document path."""

    loads: int = 0
    load_errors: int = 0
    saves: int = 0
    last_saved_at: datetime | None = None
    save_failures: Counter = field(default_factory=Counter)
    save_ms: deque = field(default_factory=lambda: deque(maxlen=RECENT_SAVES))

    def snapshot(self) -> dict[str, Any]:
        recent = list(self.save_ms)
        return {
            "loads": self.loads,
            "load_errors": self.load_errors,
            "saves": self.saves,
            "last_saved_at": self.last_saved_at.isoformat() if self.last_saved_at else None,
            "save_failures": dict(self.save_failures),
            "recent_save_ms": {
                "count": len(recent),
                "median": statistics.median(recent),
                "max": max(recent),
            }
            if recent
            else None,
        }


class StoreMetrics:
    """
    Central metrics store for flatstore observability.

    Keyed by document path so several stores can share one instance.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._documents: dict[str, DocumentStats] = {}
        self._started_at = datetime.now(timezone.utc)

    def _stats(self, path: str) -> DocumentStats:
        stats = self._documents.get(path)
        if stats is None:
            stats = self._documents[path] = DocumentStats()
        return stats

    def record_load(self, path: str) -> None:
        """Record a successful document load."""
        with self._lock:
            self._stats(path).loads += 1

    def record_load_error(self, path: str) -> None:
        """Record a failed document load."""
        with self._lock:
            self._stats(path).load_errors += 1

    def record_persist_latency(self, path: str, ms: float) -> None:
        """Record a completed write of the document and how long it took."""
        with self._lock:
            stats = self._stats(path)
            stats.saves += 1
            stats.save_ms.append(ms)
            stats.last_saved_at = datetime.now(timezone.utc)

    def record_persist_error(self, path: str, code: str) -> None:
        """Record a failed write of the document."""
        with self._lock:
            self._stats(path).save_failures[code] += 1

    def get_summary(self) -> dict[str, Any]:
        """
        Get a summary of all metrics.

        Returns a dict suitable for JSON serialization.
        """
        with self._lock:
            now = datetime.now(timezone.utc)
            return {
                "uptime_seconds": round((now - self._started_at).total_seconds(), 1),
                "collected_at": now.isoformat(),
                "documents": {path: self._documents[path].snapshot() for path in sorted(self._documents)},
            }

    def reset(self) -> None:
        """Reset all metrics. Useful for testing."""
        with self._lock:
            self._documents.clear()
            self._started_at = datetime.now(timezone.utc)


@lru_cache(maxsize=1)
def get_metrics_store() -> StoreMetrics:
    """Get the global StoreMetrics singleton."""
    return StoreMetrics()
