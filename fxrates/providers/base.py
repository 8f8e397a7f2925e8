"""Quote provider protocol and the shared HTTP fetch-and-classify logic.

A provider never raises for upstream trouble.  Every failure is reported
as a ``ProviderResult`` whose ``status`` says what went wrong, so callers
can tell a timeout from a malformed body from a dead network.
"""

import asyncio
import logging
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from fxrates.quotes.models import FetchStatus, ProviderResult

logger = logging.getLogger("fxrates.providers")

_HEADERS = {"Accept": "application/json"}


@runtime_checkable
class QuoteProvider(Protocol):
    """Interface shared by every upstream rate source."""

    name: str

    def supports(self, pair: str) -> bool:
        """Return ``False`` for pairs the upstream is known not to cover."""
        ...

    async def fetch_rate(self, pair: str) -> ProviderResult:
        """Fetch the rate for a canonical 6-letter *pair*."""
        ...


def to_positive_float(value: Any) -> Optional[float]:
    """Coerce a JSON rate value to a positive float, or ``None``."""
    if isinstance(value, bool):
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return None
    if rate != rate or rate <= 0:  # NaN compares unequal to itself
        return None
    return rate


class HttpQuoteProvider:
    """Base for providers backed by a single JSON GET request.

    Subclasses implement :meth:`build_request` and :meth:`extract_rate`.

    Args:
        timeout: Per-request timeout in seconds.  ``None`` disables the
            explicit timeout and leaves the request unbounded.
    """

    name = "http"

    def __init__(self, timeout: Optional[float] = 5.0) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def supports(self, pair: str) -> bool:
        return True

    def build_request(self, pair: str) -> tuple[str, Optional[dict]]:
        """Return ``(url, query_params)`` for *pair*."""
        raise NotImplementedError

    def extract_rate(self, pair: str, data: dict) -> Optional[float]:
        """Pull the rate for *pair* out of a decoded response body."""
        raise NotImplementedError

    async def _get(self, url: str, params: Optional[dict]) -> httpx.Response:
        async with httpx.AsyncClient() as client:
            return await client.get(
                url,
                params=params,
                headers=_HEADERS,
                timeout=self._timeout,
            )

    async def fetch_rate(self, pair: str) -> ProviderResult:
        url, params = self.build_request(pair)

        # httpx applies its timeout per phase; wait_for bounds the whole call.
        try:
            if self._timeout is None:
                resp = await self._get(url, params)
            else:
                resp = await asyncio.wait_for(self._get(url, params), self._timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            return self._miss(
                pair, FetchStatus.TIMEOUT,
                f"no response within {self._timeout}s ({exc.__class__.__name__})",
            )
        except httpx.TransportError as exc:
            return self._miss(
                pair, FetchStatus.NETWORK_ERROR, str(exc) or exc.__class__.__name__,
            )

        if not resp.is_success:
            return self._miss(pair, FetchStatus.HTTP_ERROR, f"HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError:
            return self._miss(pair, FetchStatus.MALFORMED, "response body is not JSON")

        rate = self.extract_rate(pair, data) if isinstance(data, dict) else None
        if rate is None:
            return self._miss(pair, FetchStatus.MALFORMED, "rate field missing or invalid")

        logger.debug("%s returned %s = %s", self.name, pair, rate)
        return ProviderResult(
            provider=self.name,
            pair=pair,
            status=FetchStatus.SUCCESS,
            rate=rate,
        )

    def _miss(self, pair: str, status: FetchStatus, detail: str) -> ProviderResult:
        logger.warning("%s miss for %s: %s (%s)", self.name, pair, status.value, detail)
        return ProviderResult(
            provider=self.name,
            pair=pair,
            status=status,
            detail=detail,
        )
