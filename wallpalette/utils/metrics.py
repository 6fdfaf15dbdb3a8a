"""
Wallpalette Metrics Collection
In-process metrics for extraction runs, cache effectiveness and stage timings.
"""
import time
from collections import defaultdict, Counter
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, Iterator, List

import numpy as np


class MetricsCollector:
    """Simple in-process metrics collector, one per extractor."""

    def __init__(self):
        """Initialize metrics collector."""
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._start_time = time.time()

    def increment_extraction_count(self):
        """Increment total extraction counter."""
        with self._lock:
            self._counters["extractions_total"] += 1

    def increment_cache_hit(self):
        with self._lock:
            self._counters["cache_hits_total"] += 1

    def increment_cache_miss(self):
        with self._lock:
            self._counters["cache_misses_total"] += 1

    def increment_strategy_count(self, strategy: str):
        """Increment palette strategy usage counter."""
        with self._lock:
            self._counters[f"strategy_used_total_{strategy}"] += 1

    def increment_failure_count(self, error_type: str):
        """Increment failure counter by error type."""
        with self._lock:
            self._counters[f"extraction_failed_total_{error_type}"] += 1

    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)

    @contextmanager
    def timed(self, operation: str) -> Iterator[None]:
        """Record the wall time spent inside the block under ``operation``."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_timing(operation, (time.perf_counter() - start) * 1000)

    def get_counters(self) -> Dict[str, int]:
        """Get current counter values."""
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Per-stage duration statistics in milliseconds."""
        with self._lock:
            snapshot = {op: list(t) for op, t in self._timings.items() if t}

        stats = {}
        for operation, timings in snapshot.items():
            values = np.asarray(timings, dtype=np.float64)
            p50, p95 = np.percentile(values, [50, 95])
            stats[operation] = {
                "count": int(values.size),
                "mean": float(values.mean()),
                "min": float(values.min()),
                "max": float(values.max()),
                "p50": float(p50),
                "p95": float(p95),
            }
        return stats

    def get_uptime_seconds(self) -> float:
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats()
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._start_time = time.time()
