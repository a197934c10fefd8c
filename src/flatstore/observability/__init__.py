"""
flatstore Observability Module.

Provides in-process metrics collection for document loads and persists.
"""

from flatstore.observability.metrics import StoreMetrics, get_metrics_store

__all__ = ["StoreMetrics", "get_metrics_store"]
