"""Probe port definitions (DTOs and outcome categories)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

__all__ = ["OutcomeCategory", "ProbeEvent", "ProbeResult"]


class OutcomeCategory(str, Enum):
    """Mutually exclusive classification of one probe."""

    SUCCESS = "success"
    SLOW_SUCCESS = "slow_success"
    HTTP_ERROR = "http_error"
    CONNECTION_ERROR = "connection_error"
    TIMEOUT = "timeout"


@dataclass(slots=True, frozen=True)
class ProbeResult:
    """Raw outcome of a single HTTP probe.

    Decouples the core from the HTTP library: the executor fills this in,
    the classifier judges it.

    Attributes:
        elapsed_ms: Wall-clock time from issuance to completion or abort.
        timed_out: True when no response arrived and elapsed_ms reached the
            configured timeout.
        http_status: Status code of the received response; None when no
            response was received.
    """

    elapsed_ms: int
    timed_out: bool = False
    http_status: int | None = None

    def __post_init__(self) -> None:
        if self.elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative (got: {self.elapsed_ms})")
        if self.timed_out and self.http_status is not None:
            raise ValueError("A probe with a response cannot be timed out")

    @property
    def responded(self) -> bool:
        """Whether any HTTP response was received."""
        return self.http_status is not None


@dataclass(slots=True, frozen=True)
class ProbeEvent:
    """One classified probe, emitted to reporters after recording.

    Attributes:
        timestamp: Local time the probe was issued.
        category: Outcome category assigned by the classifier.
        elapsed_ms: Measured elapsed time.
        http_status: Response status, if any.
        target_url: Monitored endpoint.
    """

    timestamp: datetime
    category: OutcomeCategory
    elapsed_ms: int
    http_status: int | None
    target_url: str
