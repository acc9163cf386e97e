"""Application entrypoint."""

import asyncio
import logging
from collections.abc import Sequence

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.http.client import HttpClient
from src.adapters.driven.logging.logging_config import add_log_file, build_log_path, configure_logs
from src.adapters.driven.metrics.run_stats import RunStatistics
from src.adapters.driven.reporting.console import ConsoleReporter
from src.core.errors import StartupFailure
from src.core.event_loop import MonitorLoop

__all__ = [
    "main",
    "run",
    "EXIT_OK",
    "EXIT_PREFLIGHT_FAILED",
    "EXIT_INVALID_PARAMS",
    "EXIT_INTERRUPTED",
]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PREFLIGHT_FAILED = 1
EXIT_INVALID_PARAMS = 2
EXIT_INTERRUPTED = 130


async def main(argv: Sequence[str] | None = None) -> int:
    """Run one monitoring session.

    Startup sequence:
    1. Configure logging.
    2. Parse and validate configuration.
    3. Open the per-run log file.
    4. Pre-flight check, then the monitor loop.
    5. Emit the final summary.

    Args:
        argv: Command-line arguments without the program name.

    Returns:
        Process exit code.
    """
    configure_logs()

    try:
        config = load_settings(argv)
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check the API URL, that durations and interval are positive integers "
            "and that the threshold is a non-negative integer.",
            exc,
        )
        return EXIT_INVALID_PARAMS

    log_path = build_log_path(config.target_url, config.log_dir)
    add_log_file(log_path)
    logger.info("Starting API monitoring...")
    logger.info(f"Monitor configured: {config.describe()}")

    # Wrap config into port so core depends on interface (hexagonal)
    settings_port = config.to_port()
    stats = RunStatistics()
    reporter = ConsoleReporter(settings_port.analysis_mode, log_file=log_path.name)

    async with HttpClient(method=settings_port.method) as http:
        monitor = MonitorLoop(
            settings=settings_port,
            probe_fn=http.execute,
            stats=stats,
            reporter=reporter,
        )
        try:
            await monitor.run()
        except StartupFailure as exc:
            logger.error(f"Stopping monitoring due to API unavailability: {exc}")
            return EXIT_PREFLIGHT_FAILED

    logger.info("Monitoring completed, log file: %s", log_path)
    return EXIT_OK


def run() -> int:
    """Console-script entrypoint."""
    try:
        return asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    raise SystemExit(run())
