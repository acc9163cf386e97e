"""In-memory statistics for one monitoring run."""

from __future__ import annotations

from collections import Counter
from datetime import datetime

from src.core.classifier import is_success
from src.ports.metrics import RunStatsDto, StatsPort
from src.ports.probe import OutcomeCategory, ProbeResult

__all__ = ["RunStatistics"]


class RunStatistics(StatsPort):
    """Running counters, latency extrema and last-error metadata.

    Tracks:
    - One counter per outcome category and the total.
    - Min/max latency of successful probes, earliest occurrence wins ties.
    - Last HTTP error code and time, last timeout time (latest wins).

    Not thread-safe; mutated only by the monitor loop.
    """

    def __init__(self) -> None:
        self._counts: Counter[OutcomeCategory] = Counter()
        self._total: int = 0
        self._min: tuple[int, datetime] | None = None
        self._max: tuple[int, datetime] | None = None
        self._last_http_error: tuple[int, datetime] | None = None
        self._last_timeout_at: datetime | None = None

    @property
    def total_checks(self) -> int:
        return self._total

    def record(self, result: ProbeResult, category: OutcomeCategory, timestamp: datetime) -> None:
        """Record one classified probe.

        Args:
            result: Raw probe result.
            category: Category assigned by the classifier.
            timestamp: Issuance time of the probe.
        """
        self._total += 1
        self._counts[category] += 1

        if is_success(category):
            latency = result.elapsed_ms
            if self._min is None or latency < self._min[0]:
                self._min = (latency, timestamp)
            if self._max is None or latency > self._max[0]:
                self._max = (latency, timestamp)
        elif category is OutcomeCategory.HTTP_ERROR and result.http_status is not None:
            self._last_http_error = (result.http_status, timestamp)
        elif category is OutcomeCategory.TIMEOUT:
            self._last_timeout_at = timestamp

    def rate(self, category: OutcomeCategory) -> int:
        """Share of a category in whole percent, 0 before any probe."""
        if self._total == 0:
            return 0
        return self._counts[category] * 100 // self._total

    def snapshot(self) -> RunStatsDto:
        """Return a read-only copy of the current statistics."""
        min_ms, min_at = self._min or (None, None)
        max_ms, max_at = self._max or (None, None)
        error_code, error_at = self._last_http_error or (None, None)
        return RunStatsDto(
            total_checks=self._total,
            success=self._counts[OutcomeCategory.SUCCESS],
            slow_success=self._counts[OutcomeCategory.SLOW_SUCCESS],
            http_error=self._counts[OutcomeCategory.HTTP_ERROR],
            connection_error=self._counts[OutcomeCategory.CONNECTION_ERROR],
            timeout=self._counts[OutcomeCategory.TIMEOUT],
            min_latency_ms=min_ms,
            min_latency_at=min_at,
            max_latency_ms=max_ms,
            max_latency_at=max_at,
            last_http_error_code=error_code,
            last_http_error_at=error_at,
            last_timeout_at=self._last_timeout_at,
        )

    def __str__(self) -> str:
        """Return human-readable one-line summary for logging.

        Returns:
            Formatted statistics string.
        """
        if not self._total:
            return "Stats: waiting for data …"

        latency = "n/a" if self._min is None else f"{self._min[0]}-{self._max[0]} ms"
        return (
            f"total={self._total} | "
            f"ok={self.rate(OutcomeCategory.SUCCESS)}% | "
            f"slow={self.rate(OutcomeCategory.SLOW_SUCCESS)}% | "
            f"http_err={self._counts[OutcomeCategory.HTTP_ERROR]} | "
            f"conn_err={self._counts[OutcomeCategory.CONNECTION_ERROR]} | "
            f"timeout={self._counts[OutcomeCategory.TIMEOUT]} | "
            f"latency={latency}"
        )
