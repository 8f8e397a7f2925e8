"""Quote data models: typed representations of rates and provider outcomes."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class PriceQuote:
    """A single exchange rate observation."""

    rate: float
    timestamp: datetime


@dataclass(frozen=True)
class CacheEntry:
    """A cached quote and the moment it was fetched."""

    quote: PriceQuote
    fetched_at: datetime


@dataclass(frozen=True)
class TradeZone:
    """Entry, target, and stop levels derived from a current price."""

    entry_low: float
    entry_high: float
    target_low: float
    target_high: float
    stop_price: float


class FetchStatus(str, Enum):
    """Outcome of a single provider attempt."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    MALFORMED = "malformed"
    ERROR = "error"  # unexpected exception inside a provider
    SKIPPED = "skipped"  # provider does not cover the pair


@dataclass(frozen=True)
class ProviderResult:
    """What a provider returned for one pair.

    ``rate`` is set only when ``status`` is ``SUCCESS``.  ``detail`` carries
    a short diagnostic (HTTP status, exception text, missing field).
    """

    provider: str
    pair: str
    status: FetchStatus
    rate: Optional[float] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.SUCCESS and self.rate is not None


@dataclass(frozen=True)
class ResolvedRate:
    """A resolved rate and the tier that produced it."""

    pair: str
    rate: float
    source: str  # provider name, "fallback", or "default"
    cached: bool = False
