"""Tests for logging setup and log file naming."""

import logging
from datetime import datetime
from pathlib import Path

from src.adapters.driven.logging.logging_config import add_log_file, build_log_path

__all__ = []


def test_build_log_path_sanitizes_url() -> None:
    path = build_log_path(
        "https://api.example.com:8443/v1/health?x=1", "logs", datetime(2024, 5, 1, 10, 0, 0)
    )

    assert path == Path("logs") / "api_monitor_api_example_com_8443_v1_health_20240501_100000.log"


def test_build_log_path_without_host() -> None:
    path = build_log_path("", "/var/log/monitor", datetime(2024, 5, 1, 10, 0, 0))

    assert path.name == "api_monitor_target_20240501_100000.log"


def test_add_log_file_creates_directory_and_writes_debug(tmp_path) -> None:
    path = tmp_path / "nested" / "run.log"
    handler = add_log_file(path)
    logger = logging.getLogger("src.tests.logfile")
    logger.setLevel(logging.DEBUG)

    try:
        logger.debug("SUCCESS - Status: 200, Time: 80ms")
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()

    assert path.exists()
    assert "DEBUG - SUCCESS - Status: 200, Time: 80ms" in path.read_text(encoding="utf-8")
