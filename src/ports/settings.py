"""Settings port definition (DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = ["AnalysisMode", "SettingsPort"]


class AnalysisMode(IntEnum):
    """Reporting verbosity of the final summary.

    Has no effect on classification or on the computed statistics.
    """

    DELAYS_ONLY = 0
    ERRORS_AND_DELAYS = 1
    FULL = 2

    @classmethod
    def parse(cls, raw: object) -> AnalysisMode:
        """Resolve a user-supplied mode, falling back to ERRORS_AND_DELAYS.

        Args:
            raw: Value from the command line or environment.

        Returns:
            The matching mode, or ERRORS_AND_DELAYS when unrecognized.
        """
        try:
            return cls(int(str(raw).strip()))
        except ValueError:
            return cls.ERRORS_AND_DELAYS

    @classmethod
    def is_known(cls, raw: object) -> bool:
        """Tell whether a user-supplied mode names one of the known modes.

        Args:
            raw: Value from the command line or environment.

        Returns:
            True for 0, 1 or 2, False for anything that would fall back.
        """
        try:
            cls(int(str(raw).strip()))
        except ValueError:
            return False
        return True

    @property
    def description(self) -> str:
        """Human-readable name shown in the run summary."""
        return _MODE_DESCRIPTIONS[self]


_MODE_DESCRIPTIONS = {
    AnalysisMode.DELAYS_ONLY: "Delays only",
    AnalysisMode.ERRORS_AND_DELAYS: "Errors and delays",
    AnalysisMode.FULL: "Full analysis including response codes",
}


@dataclass(slots=True, frozen=True)
class SettingsPort:
    """Immutable runtime settings for one monitoring run.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        target_url: Endpoint to probe.
        total_duration_sec: Wall-clock length of the run.
        interval_sec: Sleep between two probes.
        timeout_sec: Per-probe timeout, already clamped to interval_sec.
        threshold_ms: Latency above which a success counts as slow.
        analysis_mode: Summary verbosity.
        method: HTTP method used for every probe.
    """

    target_url: str
    total_duration_sec: int
    interval_sec: int
    timeout_sec: int
    threshold_ms: int
    analysis_mode: AnalysisMode = AnalysisMode.ERRORS_AND_DELAYS
    method: str = "GET"

    @property
    def timeout_ms(self) -> int:
        return self.timeout_sec * 1_000

    @property
    def max_iterations(self) -> int:
        """Nominal probe count, used for progress display only."""
        return max(1, self.total_duration_sec // self.interval_sec)
