"""
Matching statistics.

Counters and timing for one ``MediaMatcher``. Entry points record into
the collector and log a summary when they finish.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)


@dataclass
class MatchingMetrics:
    """Container for matching counters."""

    searches: int = 0
    lookup_errors: int = 0
    selections: int = 0
    failed_selections: int = 0
    matched_files: int = 0
    unmatched_files: int = 0
    ambiguity_aborts: int = 0
    total_time: float = 0.0

    @property
    def match_success_rate(self) -> float:
        total = self.matched_files + self.unmatched_files
        return self.matched_files / total if total > 0 else 0.0


class MatchingStatistics:
    """Thread-safe aggregator for matching metrics.

    Groups may be resolved concurrently, so every update takes a lock.
    """

    def __init__(self) -> None:
        self.metrics = MatchingMetrics()
        self._lock = threading.Lock()
        self._timers: dict[str, float] = {}

    def record_search(self, *, failed: bool = False) -> None:
        with self._lock:
            self.metrics.searches += 1
            if failed:
                self.metrics.lookup_errors += 1

    def record_selection(self, *, success: bool) -> None:
        with self._lock:
            if success:
                self.metrics.selections += 1
            else:
                self.metrics.failed_selections += 1

    def record_matches(self, matched: int, unmatched: int) -> None:
        with self._lock:
            self.metrics.matched_files += matched
            self.metrics.unmatched_files += unmatched

    def record_ambiguity_abort(self) -> None:
        with self._lock:
            self.metrics.ambiguity_aborts += 1

    def start_timing(self, operation: str) -> None:
        """Start timing an operation.

        Args:
            operation: Name of the operation being timed
        """
        with self._lock:
            self._timers[operation] = time.perf_counter()

    def end_timing(self, operation: str) -> float:
        """End timing an operation and return its duration in seconds."""
        with self._lock:
            start = self._timers.pop(operation, None)
            if start is None:
                logger.warning("No timing started for operation: %s", operation)
                return 0.0
            duration = time.perf_counter() - start
            self.metrics.total_time += duration
        return duration

    def summary(self) -> dict[str, object]:
        """Snapshot of all counters."""
        with self._lock:
            data: dict[str, object] = asdict(self.metrics)
            data["match_success_rate"] = round(self.metrics.match_success_rate, 4)
        return data

    def log_summary(self, operation: str) -> None:
        logger.info(
            "%s finished: %d matched, %d unmatched, %d lookup errors",
            operation,
            self.metrics.matched_files,
            self.metrics.unmatched_files,
            self.metrics.lookup_errors,
            extra={"operation": operation, "result_info": self.summary()},
        )

    def reset(self) -> None:
        with self._lock:
            self.metrics = MatchingMetrics()
            self._timers.clear()
