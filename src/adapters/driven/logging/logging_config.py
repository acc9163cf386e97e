"""Structured logging setup for the monitor."""

import logging
import re
from datetime import datetime
from pathlib import Path
from urllib.parse import urlparse

__all__ = ["add_log_file", "build_log_path", "configure_logs"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
FILE_LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logs() -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level with an INFO console handler.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (src) at DEBUG level, so file handlers see successes.
    - Structured format with timestamp, level, module, and line number.
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.setLevel(logging.INFO)

    # Root logger
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Application loggers
    logging.getLogger("src").setLevel(logging.DEBUG)


def add_log_file(path: Path) -> logging.Handler:
    """Attach a per-run plain-text log file to the root logger.

    Args:
        path: Log file to create; parent directories are created.

    Returns:
        The installed handler.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, DATE_FORMAT))
    handler.setLevel(logging.DEBUG)
    logging.getLogger().addHandler(handler)
    return handler


def build_log_path(url: str, log_dir: str | Path, now: datetime | None = None) -> Path:
    """Build a unique log file name for a run.

    Example: https://api.example.com/v1/health at 2024-05-01 10:00:00 ->
    <log_dir>/api_monitor_api_example_com_v1_health_20240501_100000.log

    Args:
        url: Monitored endpoint.
        log_dir: Directory for log files.
        now: Run start time; current time when None.

    Returns:
        Path of the log file (not created).
    """
    parsed = urlparse(url)
    api_name = re.sub(r"[^A-Za-z0-9]+", "_", f"{parsed.netloc}{parsed.path}").strip("_")
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(log_dir) / f"api_monitor_{api_name or 'target'}_{stamp}.log"
