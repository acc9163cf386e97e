"""Operator-facing reporter: live probe lines, progress bar and final summary."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

from src.core.classifier import FIRST_FAILING_HTTP_CODE, FIRST_OK_HTTP_CODE
from src.ports.metrics import RunStatsDto
from src.ports.probe import OutcomeCategory, ProbeEvent, ProbeResult
from src.ports.reporter import ReporterPort
from src.ports.settings import AnalysisMode, SettingsPort

__all__ = ["ConsoleReporter", "format_event", "render_progress", "summary_lines"]

logger = logging.getLogger(__name__)

BAR_LENGTH = 30
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_LABELS = {
    OutcomeCategory.SUCCESS: "SUCCESS",
    OutcomeCategory.SLOW_SUCCESS: "SLOW RESPONSE",
    OutcomeCategory.HTTP_ERROR: "HTTP ERROR",
    OutcomeCategory.CONNECTION_ERROR: "CONNECTION ERROR",
    OutcomeCategory.TIMEOUT: "TIMEOUT",
}

_LEVELS = {
    OutcomeCategory.SUCCESS: logging.DEBUG,
    OutcomeCategory.SLOW_SUCCESS: logging.WARNING,
    OutcomeCategory.HTTP_ERROR: logging.ERROR,
    OutcomeCategory.CONNECTION_ERROR: logging.ERROR,
    OutcomeCategory.TIMEOUT: logging.ERROR,
}


def _fmt_time(value: datetime | None) -> str:
    return value.strftime(TIME_FORMAT) if value else "n/a"


def format_event(event: ProbeEvent) -> str:
    """Render one probe as a single log line.

    The line carries the issuance time of the probe, the same instant the
    run statistics store, not the time the line is written.

    Args:
        event: Classified probe.

    Returns:
        Formatted line, e.g. "[2024-05-01 10:00:00] TIMEOUT - URL: ..., Time: 5000ms".
    """
    label = _LABELS[event.category]
    stamp = _fmt_time(event.timestamp)
    if event.http_status is None:
        return f"[{stamp}] {label} - URL: {event.target_url}, Time: {event.elapsed_ms}ms"
    return f"[{stamp}] {label} - Status: {event.http_status}, Time: {event.elapsed_ms}ms"


def render_progress(percent: int, current: int, maximum: int) -> str:
    """Draw a fixed-width text progress bar, rewound to the line start.

    Args:
        percent: Completion capped at 100.
        current: Probes recorded so far.
        maximum: Nominal probe count of the run.

    Returns:
        Bar text beginning with a carriage return.
    """
    filled = percent * BAR_LENGTH // 100
    bar = "█" * filled + "░" * (BAR_LENGTH - filled)
    return f"\rProgress: {bar} {percent}% ({current}/{maximum})  "


def summary_lines(stats: RunStatsDto, mode: AnalysisMode) -> list[str]:
    """Build the end-of-run summary for a given verbosity.

    DELAYS_ONLY shows volume, slow responses and latency extrema.
    ERRORS_AND_DELAYS adds error counters and the last error/timeout.
    FULL adds every rate and all capture timestamps.

    Args:
        stats: Final statistics snapshot.
        mode: Analysis mode of the run.

    Returns:
        Summary lines, in display order.
    """
    full = mode is AnalysisMode.FULL
    errors = mode is not AnalysisMode.DELAYS_ONLY

    lines = [
        "MONITORING SUMMARY",
        f"Total checks performed: {stats.total_checks}",
        f"Successful responses: {stats.success} ({stats.rate(OutcomeCategory.SUCCESS)}%)",
        f"Slow responses: {stats.slow_success} ({stats.rate(OutcomeCategory.SLOW_SUCCESS)}%)",
    ]

    if errors:
        conn_rate = stats.rate(OutcomeCategory.CONNECTION_ERROR)
        lines.append(f"Connection errors: {stats.connection_error} ({conn_rate}%)")
        http_errors = f"HTTP error responses: {stats.http_error}"
        timeouts = f"Timeout responses: {stats.timeout}"
        if full:
            http_errors += f" ({stats.rate(OutcomeCategory.HTTP_ERROR)}%)"
            timeouts += f" ({stats.rate(OutcomeCategory.TIMEOUT)}%)"
        lines += [http_errors, timeouts]

    if stats.min_latency_ms is None:
        lines.append("Latency: no successful responses")
    else:
        min_line = f"Minimum response time: {stats.min_latency_ms}ms"
        max_line = f"Maximum response time: {stats.max_latency_ms}ms"
        if full:
            min_line += f" at {_fmt_time(stats.min_latency_at)}"
            max_line += f" at {_fmt_time(stats.max_latency_at)}"
        lines += [min_line, max_line]

    if errors and stats.last_http_error_code is not None:
        line = f"Last HTTP error code: {stats.last_http_error_code}"
        if full:
            line += f" at {_fmt_time(stats.last_http_error_at)}"
        lines.append(line)
    if errors and stats.last_timeout_at is not None:
        lines.append(f"Last timeout occurred at: {_fmt_time(stats.last_timeout_at)}")

    lines.append(f"Analysis mode: {mode.description}")
    return lines


class ConsoleReporter(ReporterPort):
    """Reporter writing through logging, plus an in-place progress bar.

    Abnormal probes are logged as they happen; successes go to DEBUG so
    they only reach the run's log file.
    """

    def __init__(
        self,
        mode: AnalysisMode = AnalysisMode.ERRORS_AND_DELAYS,
        *,
        stream: TextIO | None = None,
        show_progress: bool | None = None,
        log_file: str | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            mode: Summary verbosity.
            stream: Where the progress bar is drawn; stdout when None.
            show_progress: Force the progress bar on/off; on for terminals by default.
            log_file: Log file shown in the header, if any.
        """
        self.mode = mode
        self.stream = stream or sys.stdout
        self.log_file = log_file
        if show_progress is None:
            show_progress = self.stream.isatty()
        self.show_progress = show_progress
        self._progress_drawn = False

    def on_start(self, settings: SettingsPort) -> None:
        """Log the run header.

        Args:
            settings: Configuration of the run.
        """
        logger.info("API MONITORING TOOL")
        logger.info(f"URL: {settings.target_url}")
        logger.info(
            f"Duration: {settings.total_duration_sec // 60} minutes "
            f"({settings.total_duration_sec} seconds)"
        )
        logger.info(f"Interval: {settings.interval_sec} seconds")
        logger.info(f"Delay threshold: {settings.threshold_ms}ms")
        logger.info(f"Timeout: {settings.timeout_sec} seconds")
        logger.info(f"Method: {settings.method}")
        logger.info(f"Analysis mode: {settings.analysis_mode.value}")
        if self.log_file:
            logger.info(f"Log file: {self.log_file}")

    def on_preflight(self, result: ProbeResult) -> None:
        """Log whether the target answered the availability check.

        Args:
            result: Outcome of the uncounted pre-flight probe.
        """
        if result.http_status is None:
            logger.error("Cannot reach API endpoint")
        elif not FIRST_OK_HTTP_CODE <= result.http_status < FIRST_FAILING_HTTP_CODE:
            logger.warning(f"API returned HTTP code {result.http_status}")
        else:
            logger.info("API is available")

    def on_probe(self, event: ProbeEvent) -> None:
        """Log one probe; successes only reach DEBUG handlers.

        Args:
            event: Classified probe with its issuance time.
        """
        level = _LEVELS[event.category]
        if level >= logging.INFO:
            self._end_progress_line()
        logger.log(level, format_event(event))

    def on_progress(self, percent: int, current: int, maximum: int) -> None:
        """Redraw the progress bar in place when enabled."""
        if not self.show_progress:
            return
        self.stream.write(render_progress(percent, current, maximum))
        self.stream.flush()
        self._progress_drawn = True

    def on_summary(self, stats: RunStatsDto) -> None:
        """Log the end-of-run summary at the configured verbosity.

        Args:
            stats: Final statistics snapshot.
        """
        self._end_progress_line()
        for line in summary_lines(stats, self.mode):
            logger.info(line)

    def _end_progress_line(self) -> None:
        if self._progress_drawn:
            self.stream.write("\n")
            self.stream.flush()
            self._progress_drawn = False
