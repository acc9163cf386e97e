"""Outcome classification of raw probe results."""

from src.ports.probe import OutcomeCategory, ProbeResult

__all__ = ["classify", "is_success", "FIRST_FAILING_HTTP_CODE", "FIRST_OK_HTTP_CODE"]

FIRST_OK_HTTP_CODE = 200
FIRST_FAILING_HTTP_CODE = 400


def is_success(category: OutcomeCategory) -> bool:
    """Return True for categories whose latency counts toward extrema."""
    return category in (OutcomeCategory.SUCCESS, OutcomeCategory.SLOW_SUCCESS)


def classify(result: ProbeResult, threshold_ms: int) -> OutcomeCategory:
    """Assign exactly one outcome category to a probe result.

    Rules:
    - no response and timed out -> TIMEOUT
    - no response otherwise -> CONNECTION_ERROR
    - status outside [200, 400) -> HTTP_ERROR
    - elapsed above threshold -> SLOW_SUCCESS
    - otherwise -> SUCCESS

    Args:
        result: Raw probe result from the executor.
        threshold_ms: Slow-response threshold in milliseconds.

    Returns:
        The outcome category.
    """
    if result.http_status is None:
        return OutcomeCategory.TIMEOUT if result.timed_out else OutcomeCategory.CONNECTION_ERROR

    if not FIRST_OK_HTTP_CODE <= result.http_status < FIRST_FAILING_HTTP_CODE:
        return OutcomeCategory.HTTP_ERROR

    if result.elapsed_ms > threshold_ms:
        return OutcomeCategory.SLOW_SUCCESS
    return OutcomeCategory.SUCCESS
