"""HTTP probe executor built on aiohttp."""

import asyncio
import logging
import time
from collections.abc import Callable
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout

from src.ports.probe import ProbeResult

__all__ = ["HttpClient", "TRANSPORT_ERRORS"]

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "GET"

# Failures meaning "no response was received"
TRANSPORT_ERRORS = (
    aiohttp.ClientError,  # Connection refused, DNS failed, reset, payload errors
    asyncio.TimeoutError,  # Total timeout exceeded
    OSError,  # OS-level network error
)


class HttpClient:
    """HTTP client issuing single, timed, non-retried probes.

    Features:
    - One request per call, aborted after the configured timeout.
    - Millisecond elapsed time covering the whole exchange.
    - Context manager for proper resource cleanup.
    """

    def __init__(
        self,
        method: str = DEFAULT_METHOD,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize HTTP client.

        Args:
            method: HTTP method used for every probe.
            clock: High-resolution time source in seconds.
        """
        self.method = method.upper()
        self._clock = clock
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def _request_once(self, url: str, timeout: int) -> int:
        """Send one request and drain its body.

        Args:
            url: URL to probe.
            timeout: Total timeout in seconds.

        Returns:
            HTTP status code.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Network/timeout errors.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        resp = await self.session.request(
            self.method, url, timeout=ClientTimeout(total=timeout), allow_redirects=True
        )
        try:
            await resp.read()
        finally:
            resp.release()
        return resp.status

    async def execute(self, url: str, timeout: int) -> ProbeResult:
        """Probe an endpoint exactly once.

        Any received response is returned with its status, whatever its value.
        Without a response the probe counts as timed out when the elapsed time
        reached the timeout, and as a connection failure otherwise.

        Args:
            url: URL to probe.
            timeout: Timeout in seconds.

        Returns:
            Probe result with elapsed time in milliseconds.
        """
        start = self._clock()
        try:
            status = await self._request_once(url, timeout)
        except TRANSPORT_ERRORS as e:
            elapsed_ms = self._elapsed_ms(start)
            logger.debug(f"No response from {url} after {elapsed_ms}ms: {e!r}")
            return ProbeResult(elapsed_ms=elapsed_ms, timed_out=elapsed_ms >= timeout * 1_000)

        elapsed_ms = self._elapsed_ms(start)
        logger.debug(f"{self.method} {url} returned status {status} in {elapsed_ms}ms")
        return ProbeResult(elapsed_ms=elapsed_ms, http_status=status)

    def _elapsed_ms(self, start: float) -> int:
        return max(0, round((self._clock() - start) * 1_000))
