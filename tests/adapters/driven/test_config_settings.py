"""Tests for configuration loading and validation."""

import pytest

from src.adapters.driven.config.settings import Settings, load_settings
from src.ports.settings import AnalysisMode, SettingsPort

__all__ = []

BASE_ARGS = ["https://api.example.com/health", "30", "60", "1500"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Isolate tests from MONITOR_* variables of the host."""
    for name in (
        "MONITOR_TIMEOUT_SECONDS",
        "MONITOR_ANALYSIS_MODE",
        "MONITOR_HTTP_METHOD",
        "MONITOR_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_applies_defaults() -> None:
    """Timeout and analysis mode should default to 5s and mode 1."""
    settings = load_settings(BASE_ARGS)

    assert settings.target_url == "https://api.example.com/health"
    assert settings.total_minutes == 30
    assert settings.interval_sec == 60
    assert settings.threshold_ms == 1500
    assert settings.timeout_sec == 5
    assert settings.resolved_mode is AnalysisMode.ERRORS_AND_DELAYS
    assert settings.method == "GET"
    assert settings.log_dir == "logs"


def test_load_settings_reads_optional_positionals() -> None:
    settings = load_settings([*BASE_ARGS, "10", "2", "--method", "head"])

    assert settings.timeout_sec == 10
    assert settings.resolved_mode is AnalysisMode.FULL
    assert settings.method == "HEAD"


def test_load_settings_uses_environment_fallbacks(monkeypatch) -> None:
    monkeypatch.setenv("MONITOR_TIMEOUT_SECONDS", "7")
    monkeypatch.setenv("MONITOR_ANALYSIS_MODE", "0")
    monkeypatch.setenv("MONITOR_LOG_DIR", "/tmp/monitor-logs")

    settings = load_settings(BASE_ARGS)

    assert settings.timeout_sec == 7
    assert settings.resolved_mode is AnalysisMode.DELAYS_ONLY
    assert settings.log_dir == "/tmp/monitor-logs"


def test_timeout_is_clamped_to_interval() -> None:
    """A timeout above the interval should be silently lowered."""
    settings = Settings(
        target_url="http://localhost:8000",
        total_minutes=1,
        interval_sec=3,
        threshold_ms=100,
        timeout_sec=10,
    )

    assert settings.timeout_sec == 3


def test_unknown_analysis_mode_falls_back(caplog) -> None:
    """Unrecognized modes should resolve to errors-and-delays with a warning."""
    with caplog.at_level("WARNING"):
        settings = load_settings([*BASE_ARGS, "5", "7"])

    assert settings.analysis_mode == "7"
    assert settings.resolved_mode is AnalysisMode.ERRORS_AND_DELAYS
    assert "Unknown analysis mode" in caplog.text


@pytest.mark.parametrize("url", ["ftp://example.com", "not a url", ""])
def test_settings_rejects_invalid_url(url: str) -> None:
    with pytest.raises(ValueError, match="Invalid API URL"):
        Settings(target_url=url, total_minutes=1, interval_sec=1, threshold_ms=1)


@pytest.mark.parametrize(
    "overrides",
    [
        {"total_minutes": 0},
        {"interval_sec": -5},
        {"threshold_ms": -1},
        {"timeout_sec": 0},
        {"method": "GE T"},
    ],
)
def test_settings_rejects_invalid_numbers(overrides: dict) -> None:
    values = {
        "target_url": "http://localhost:8000",
        "total_minutes": 1,
        "interval_sec": 1,
        "threshold_ms": 1,
    }
    values.update(overrides)

    with pytest.raises(ValueError):
        Settings(**values)


def test_load_settings_exits_on_missing_arguments() -> None:
    """argparse should reject a command line without the required positionals."""
    with pytest.raises(SystemExit):
        load_settings(["https://api.example.com"])


def test_load_settings_exits_on_non_integer_interval() -> None:
    with pytest.raises(SystemExit):
        load_settings(["https://api.example.com", "30", "soon", "1500"])


def test_to_port_converts_minutes_and_mode() -> None:
    port = load_settings([*BASE_ARGS, "90", "2"]).to_port()

    assert port == SettingsPort(
        target_url="https://api.example.com/health",
        total_duration_sec=1800,
        interval_sec=60,
        timeout_sec=60,
        threshold_ms=1500,
        analysis_mode=AnalysisMode.FULL,
        method="GET",
    )
    assert port.timeout_ms == 60_000
    assert port.max_iterations == 30


def test_max_iterations_is_never_zero() -> None:
    """An interval longer than the run should still give a usable progress base."""
    port = SettingsPort(
        target_url="http://test",
        total_duration_sec=60,
        interval_sec=300,
        timeout_sec=5,
        threshold_ms=100,
    )

    assert port.max_iterations == 1


@pytest.mark.parametrize(
    ("raw", "expected", "known"),
    [
        ("0", AnalysisMode.DELAYS_ONLY, True),
        (" 2 ", AnalysisMode.FULL, True),
        ("3", AnalysisMode.ERRORS_AND_DELAYS, False),
        ("full", AnalysisMode.ERRORS_AND_DELAYS, False),
    ],
)
def test_analysis_mode_parse(raw: str, expected: AnalysisMode, known: bool) -> None:
    assert AnalysisMode.parse(raw) is expected
    assert AnalysisMode.is_known(raw) is known


def test_describe_reports_resolved_values() -> None:
    """describe() should show clamped timeout, resolved mode and method."""
    settings = load_settings([*BASE_ARGS, "90", "9", "--method", "head"])

    assert settings.describe() == (
        "url=https://api.example.com/health, duration=30min, interval=60s, "
        "threshold=1500ms, timeout=60s, mode=1, method=HEAD"
    )
