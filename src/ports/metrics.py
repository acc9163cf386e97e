"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from src.ports.probe import OutcomeCategory, ProbeResult

__all__ = ["RunStatsDto", "StatsPort"]


@dataclass(slots=True, frozen=True)
class RunStatsDto:
    """Immutable snapshot of the statistics of one run.

    Attributes:
        total_checks: Number of recorded probes (pre-flight excluded).
        success: Fast successful responses.
        slow_success: Successful responses above the slow threshold.
        http_error: Responses outside [200, 400).
        connection_error: No response, aborted before the timeout.
        timeout: No response within the timeout.
        min_latency_ms: Lowest successful latency; None before any success.
        min_latency_at: When min_latency_ms was first observed.
        max_latency_ms: Highest successful latency; None before any success.
        max_latency_at: When max_latency_ms was first observed.
        last_http_error_code: Status of the most recent HTTP error.
        last_http_error_at: When the most recent HTTP error occurred.
        last_timeout_at: When the most recent timeout occurred.
    """

    total_checks: int = 0
    success: int = 0
    slow_success: int = 0
    http_error: int = 0
    connection_error: int = 0
    timeout: int = 0
    min_latency_ms: int | None = None
    min_latency_at: datetime | None = None
    max_latency_ms: int | None = None
    max_latency_at: datetime | None = None
    last_http_error_code: int | None = None
    last_http_error_at: datetime | None = None
    last_timeout_at: datetime | None = None

    def count(self, category: OutcomeCategory) -> int:
        """Return the counter for one category."""
        return getattr(self, category.value)

    def rate(self, category: OutcomeCategory) -> int:
        """Return the share of a category in whole percent, rounded down.

        Returns:
            count * 100 // total_checks, or 0 when nothing was recorded.
        """
        if self.total_checks == 0:
            return 0
        return self.count(category) * 100 // self.total_checks


class StatsPort(Protocol):
    """Interface for aggregating classified probes.

    Core calls record() after each probe; presentation layers read
    snapshot() between iterations and once at the end.
    """

    @property
    def total_checks(self) -> int: ...

    def record(
        self, result: ProbeResult, category: OutcomeCategory, timestamp: datetime, /
    ) -> None:
        """Record one classified probe.

        Args:
            result: Raw probe result.
            category: Category assigned by the classifier.
            timestamp: Issuance time of the probe.
        """
        ...

    def snapshot(self) -> RunStatsDto:
        """Return a read-only copy of the current statistics."""
        ...
