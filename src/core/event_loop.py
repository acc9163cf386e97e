"""Monitor loop that periodically probes the target and aggregates outcomes."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from enum import Enum

from src.core.classifier import classify
from src.core.errors import StartupFailure
from src.ports.metrics import RunStatsDto, StatsPort
from src.ports.probe import ProbeEvent, ProbeResult
from src.ports.reporter import ReporterPort
from src.ports.settings import SettingsPort

__all__ = ["MonitorLoop", "MonitorState", "ProbeFn", "get_now_time"]

logger = logging.getLogger(__name__)

ProbeFn = Callable[[str, int], Awaitable[ProbeResult]]


class MonitorState(str, Enum):
    INITIALIZING = "initializing"
    PROBING = "probing"
    SLEEPING = "sleeping"
    STOPPED = "stopped"


def get_now_time() -> float:
    """Get current monotonic time in seconds.

    Uses event loop's monotonic clock so the stop condition is immune
    to wall-clock adjustments.

    Returns:
        Current time in seconds (monotonic).
    """
    return asyncio.get_running_loop().time()


class MonitorLoop:
    """Drive one monitoring run: pre-flight, probe/sleep cycles, summary.

    Probes are strictly sequential. The run stops once the monotonic
    time elapsed since the first probe reaches the configured duration;
    the nominal iteration count only feeds the progress display.
    """

    def __init__(
        self,
        settings: SettingsPort,
        probe_fn: ProbeFn,
        stats: StatsPort,
        reporter: ReporterPort,
        *,
        clock: Callable[[], float] = get_now_time,
        sleep_fn: Callable[[float], Awaitable[None]] | None = None,
        now_fn: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the loop.

        Args:
            settings: Immutable run configuration.
            probe_fn: Async callable issuing exactly one probe.
            stats: Aggregator receiving every classified probe.
            reporter: Presentation collaborator.
            clock: Monotonic time source in seconds.
            sleep_fn: Async sleep; defaults to asyncio.sleep.
            now_fn: Wall-clock source for event timestamps.
        """
        self.settings = settings
        self.state = MonitorState.INITIALIZING
        self._probe_fn = probe_fn
        self._stats = stats
        self._reporter = reporter
        self._clock = clock
        self._sleep_fn = sleep_fn
        self._now_fn = now_fn
        self._preflight_failed = False

    @property
    def preflight_failed(self) -> bool:
        """True when the run was aborted because the target never answered."""
        return self._preflight_failed

    async def run(self) -> RunStatsDto:
        """Execute the whole run.

        Returns:
            Final statistics snapshot, also handed to the reporter.

        Raises:
            StartupFailure: If the pre-flight probe received no response.
        """
        self.state = MonitorState.INITIALIZING
        self._reporter.on_start(self.settings)
        await self._preflight()

        logger.info("Starting monitoring of %s", self.settings.target_url)
        started = self._clock()
        while self._clock() - started < self.settings.total_duration_sec:
            self.state = MonitorState.PROBING
            await self._probe_once()

            self.state = MonitorState.SLEEPING
            await self._sleep(self.settings.interval_sec)

        self.state = MonitorState.STOPPED
        snapshot = self._stats.snapshot()
        logger.info("Monitoring completed after %d checks", snapshot.total_checks)
        self._reporter.on_summary(snapshot)
        return snapshot

    async def _preflight(self) -> None:
        """Probe once, uncounted; abort the run if nothing answers."""
        logger.info("Checking availability of %s...", self.settings.target_url)
        result = await self._safe_probe()
        self._reporter.on_preflight(result)

        if not result.responded:
            self._preflight_failed = True
            self.state = MonitorState.STOPPED
            raise StartupFailure(f"Cannot reach API endpoint {self.settings.target_url}")

    async def _probe_once(self) -> None:
        timestamp = self._now_fn()
        result = await self._safe_probe()
        category = classify(result, self.settings.threshold_ms)
        self._stats.record(result, category, timestamp)

        self._reporter.on_probe(
            ProbeEvent(
                timestamp=timestamp,
                category=category,
                elapsed_ms=result.elapsed_ms,
                http_status=result.http_status,
                target_url=self.settings.target_url,
            )
        )

        total = self._stats.total_checks
        maximum = self.settings.max_iterations
        self._reporter.on_progress(min(100, total * 100 // maximum), total, maximum)
        logger.debug("Run stats: %s", self._stats)

    async def _safe_probe(self) -> ProbeResult:
        """Issue one probe; unexpected errors become a no-response result."""
        started = self._clock()
        try:
            return await self._probe_fn(self.settings.target_url, self.settings.timeout_sec)
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error while probing: {e}", exc_info=True)
            elapsed_ms = max(0, round((self._clock() - started) * 1_000))
            return ProbeResult(
                elapsed_ms=elapsed_ms,
                timed_out=elapsed_ms >= self.settings.timeout_ms,
            )

    async def _sleep(self, seconds: float) -> None:
        sleep_fn = self._sleep_fn or asyncio.sleep
        await sleep_fn(seconds)
