"""Tests for outcome classification."""

import pytest

from src.core.classifier import classify, is_success
from src.ports.probe import OutcomeCategory, ProbeResult

__all__ = []


def test_no_response_after_timeout_is_timeout() -> None:
    """6000ms without response under a 5s timeout should be a timeout."""
    result = ProbeResult(elapsed_ms=6000, timed_out=True)
    assert classify(result, 1500) is OutcomeCategory.TIMEOUT


def test_no_response_before_timeout_is_connection_error() -> None:
    """2000ms without response under a 5s timeout should be a connection error."""
    result = ProbeResult(elapsed_ms=2000)
    assert classify(result, 1500) is OutcomeCategory.CONNECTION_ERROR


def test_slow_success_above_threshold() -> None:
    result = ProbeResult(elapsed_ms=1800, http_status=200)
    assert classify(result, 1500) is OutcomeCategory.SLOW_SUCCESS


def test_success_at_threshold_is_not_slow() -> None:
    result = ProbeResult(elapsed_ms=1500, http_status=200)
    assert classify(result, 1500) is OutcomeCategory.SUCCESS


def test_server_error_is_http_error() -> None:
    result = ProbeResult(elapsed_ms=300, http_status=503)
    assert classify(result, 1500) is OutcomeCategory.HTTP_ERROR


def test_slow_http_error_stays_http_error() -> None:
    """HTTP errors should never be reported as slow."""
    result = ProbeResult(elapsed_ms=9000, http_status=500)
    assert classify(result, 1500) is OutcomeCategory.HTTP_ERROR


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (100, OutcomeCategory.HTTP_ERROR),
        (199, OutcomeCategory.HTTP_ERROR),
        (200, OutcomeCategory.SUCCESS),
        (301, OutcomeCategory.SUCCESS),
        (399, OutcomeCategory.SUCCESS),
        (400, OutcomeCategory.HTTP_ERROR),
        (404, OutcomeCategory.HTTP_ERROR),
    ],
)
def test_status_boundaries(status: int, expected: OutcomeCategory) -> None:
    """Only [200, 400) should count as success."""
    assert classify(ProbeResult(elapsed_ms=10, http_status=status), 1500) is expected


@pytest.mark.parametrize(
    "result",
    [
        ProbeResult(0),
        ProbeResult(5000, timed_out=True),
        ProbeResult(0, http_status=200),
        ProbeResult(10_000, http_status=200),
        ProbeResult(10, http_status=0),
        ProbeResult(10, http_status=599),
    ],
)
def test_classification_yields_single_category(result: ProbeResult) -> None:
    """Classification should be deterministic and yield one known category."""
    first = classify(result, 1000)
    assert first in OutcomeCategory
    assert classify(result, 1000) is first


def test_is_success() -> None:
    assert is_success(OutcomeCategory.SUCCESS)
    assert is_success(OutcomeCategory.SLOW_SUCCESS)
    assert not is_success(OutcomeCategory.HTTP_ERROR)
    assert not is_success(OutcomeCategory.CONNECTION_ERROR)
    assert not is_success(OutcomeCategory.TIMEOUT)


def test_probe_result_rejects_negative_elapsed() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        ProbeResult(elapsed_ms=-1)


def test_probe_result_rejects_timed_out_response() -> None:
    with pytest.raises(ValueError, match="cannot be timed out"):
        ProbeResult(elapsed_ms=6000, timed_out=True, http_status=200)
