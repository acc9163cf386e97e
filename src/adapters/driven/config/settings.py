"""Configuration loading from command-line arguments and environment."""

import argparse
import logging
import os
from collections.abc import Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator, model_validator

from src.ports.settings import AnalysisMode, SettingsPort

__all__ = ["Settings", "build_parser", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

DEFAULT_TIMEOUT_SEC = 5
DEFAULT_ANALYSIS_MODE = "1"
DEFAULT_LOG_DIR = "logs"
DEFAULT_METHOD = "GET"


class Settings(BaseModel):
    """Startup configuration of one monitoring run.

    Attributes:
        target_url: HTTP(S) endpoint to monitor.
        total_minutes: Length of the run in minutes.
        interval_sec: Seconds between probes.
        threshold_ms: Latency above which a success counts as slow.
        timeout_sec: Per-probe timeout, clamped to interval_sec.
        analysis_mode: Raw analysis mode as supplied by the user.
        method: HTTP method used for probes.
        log_dir: Directory receiving the per-run log file.
    """

    target_url: str = Field(..., description="HTTP endpoint to monitor.")
    total_minutes: int = Field(..., gt=0, description="Total run time in minutes.")
    interval_sec: int = Field(..., gt=0, description="Interval between probes in seconds.")
    threshold_ms: int = Field(..., ge=0, description="Slow response threshold in milliseconds.")
    timeout_sec: int = Field(default=DEFAULT_TIMEOUT_SEC, gt=0, description="Probe timeout.")
    analysis_mode: str = Field(default=DEFAULT_ANALYSIS_MODE, description="0, 1 or 2.")
    method: str = Field(default=DEFAULT_METHOD, description="HTTP method for probes.")
    log_dir: str = Field(default=DEFAULT_LOG_DIR, description="Directory for run logs.")

    @field_validator("target_url")
    @classmethod
    def validate_target_url(cls, v: str) -> str:
        """Validate that the target is a valid HTTP(S) URL.

        Args:
            v: URL to validate.

        Returns:
            The validated URL.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http:// and https:// endpoints allowed")
        except Exception as e:
            raise ValueError(f"Invalid API URL: {e}") from e
        return v

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        method = v.strip().upper()
        if not method.isalpha():
            raise ValueError(f"Invalid HTTP method: {v!r}")
        return method

    @model_validator(mode="after")
    def clamp_timeout(self) -> "Settings":
        """Keep the probe timeout within the interval between probes."""
        if self.timeout_sec > self.interval_sec:
            logger.debug(
                f"Timeout {self.timeout_sec}s exceeds interval, clamped to {self.interval_sec}s"
            )
            self.timeout_sec = self.interval_sec
        return self

    @property
    def resolved_mode(self) -> AnalysisMode:
        return AnalysisMode.parse(self.analysis_mode)

    def describe(self) -> str:
        """Return the resolved configuration as one log-friendly line."""
        return (
            f"url={self.target_url}, "
            f"duration={self.total_minutes}min, "
            f"interval={self.interval_sec}s, "
            f"threshold={self.threshold_ms}ms, "
            f"timeout={self.timeout_sec}s, "
            f"mode={self.resolved_mode.value}, "
            f"method={self.method}"
        )

    def to_port(self) -> SettingsPort:
        """Convert into the immutable settings the core depends on."""
        return SettingsPort(
            target_url=self.target_url,
            total_duration_sec=self.total_minutes * 60,
            interval_sec=self.interval_sec,
            timeout_sec=self.timeout_sec,
            threshold_ms=self.threshold_ms,
            analysis_mode=self.resolved_mode,
            method=self.method,
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    Optional positionals and options fall back to environment variables
    (a .env file is honored), then to built-in defaults.
    """
    p = argparse.ArgumentParser(
        prog="api-monitor",
        description="Periodically probe one HTTP endpoint and report availability and latency.",
        epilog="Analysis modes: 0 - delays only, 1 - errors and delays, 2 - full analysis",
    )
    p.add_argument("api_url", help="endpoint to monitor, e.g. https://api.example.com/health")
    p.add_argument("total_minutes", type=int, help="total monitoring time in minutes")
    p.add_argument("interval_seconds", type=int, help="seconds between probes")
    p.add_argument("threshold_ms", type=int, help="slow response threshold in milliseconds")
    p.add_argument(
        "timeout_seconds",
        type=int,
        nargs="?",
        default=os.getenv("MONITOR_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SEC)),
        help="probe timeout in seconds, never above the interval (default: 5)",
    )
    p.add_argument(
        "analysis_mode",
        nargs="?",
        default=os.getenv("MONITOR_ANALYSIS_MODE", DEFAULT_ANALYSIS_MODE),
        help="summary verbosity: 0, 1 or 2 (default: 1)",
    )
    p.add_argument("--method", default=os.getenv("MONITOR_HTTP_METHOD", DEFAULT_METHOD))
    p.add_argument("--log-dir", default=os.getenv("MONITOR_LOG_DIR", DEFAULT_LOG_DIR))
    return p


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Parse and validate the startup configuration.

    Usage:
        api-monitor <API_URL> <total_time_minutes> <interval_seconds> <threshold_ms>
                    [timeout_seconds] [analysis_mode] [--method M] [--log-dir DIR]

    Optional environment variables:
    - MONITOR_TIMEOUT_SECONDS, MONITOR_ANALYSIS_MODE, MONITOR_HTTP_METHOD,
      MONITOR_LOG_DIR.

    Args:
        argv: Arguments without the program name; sys.argv when None.

    Returns:
        Validated Settings object.

    Raises:
        ValueError: If configuration is invalid.
        SystemExit: If arguments are missing or malformed (argparse).
    """
    args = build_parser().parse_args(argv)

    settings = Settings(
        target_url=args.api_url,
        total_minutes=args.total_minutes,
        interval_sec=args.interval_seconds,
        threshold_ms=args.threshold_ms,
        timeout_sec=args.timeout_seconds,
        analysis_mode=str(args.analysis_mode),
        method=args.method,
        log_dir=args.log_dir,
    )

    if not AnalysisMode.is_known(settings.analysis_mode):
        logger.warning(
            f"Unknown analysis mode {settings.analysis_mode!r}, "
            f"falling back to {settings.resolved_mode.description.lower()}"
        )

    return settings
