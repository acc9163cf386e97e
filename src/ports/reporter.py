"""Reporter port definition (interface)."""

from __future__ import annotations

from typing import Protocol

from src.ports.metrics import RunStatsDto
from src.ports.probe import ProbeEvent, ProbeResult
from src.ports.settings import SettingsPort

__all__ = ["ReporterPort"]


class ReporterPort(Protocol):
    """Presentation collaborator the monitor loop emits into.

    Every call is synchronous and made from the loop itself, so
    implementations may read their arguments without locking.
    """

    def on_start(self, settings: SettingsPort, /) -> None:
        """Report the run configuration before the pre-flight check."""
        ...

    def on_preflight(self, result: ProbeResult, /) -> None:
        """Report the outcome of the pre-flight availability check."""
        ...

    def on_probe(self, event: ProbeEvent, /) -> None:
        """Report one classified probe, before the loop sleeps."""
        ...

    def on_progress(self, percent: int, current: int, maximum: int, /) -> None:
        """Report display-only progress after each probe.

        Args:
            percent: Completion capped at 100.
            current: Probes recorded so far.
            maximum: Nominal probe count of the run.
        """
        ...

    def on_summary(self, stats: RunStatsDto, /) -> None:
        """Report the final statistics, once, after the run stopped."""
        ...
