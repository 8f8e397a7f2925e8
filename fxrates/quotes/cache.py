"""In-memory, time-boxed price cache.

One ``PriceCache`` is owned by whoever builds the resolver and injected into
it, so tests (and independent resolvers) never share entries.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from fxrates.quotes.models import CacheEntry, PriceQuote

DEFAULT_TTL_SECONDS = 60.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PriceCache:
    """Pair code -> ``CacheEntry`` map with a freshness window.

    Entries are overwritten on every refresh and never deleted; an entry
    older than ``ttl_seconds`` is simply not returned by :meth:`get`.

    Args:
        ttl_seconds: Freshness window (default 60 s).
        clock: Callable returning the current aware ``datetime``.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def now(self) -> datetime:
        return self._clock()

    def get(self, pair: str) -> Optional[CacheEntry]:
        """Return the entry for *pair* if it is younger than the TTL."""
        entry = self._entries.get(pair)
        if entry is None:
            return None
        age = (self._clock() - entry.fetched_at).total_seconds()
        if age < self._ttl_seconds:
            return entry
        return None

    def peek(self, pair: str) -> Optional[CacheEntry]:
        """Return the stored entry for *pair* regardless of age."""
        return self._entries.get(pair)

    def put(self, pair: str, quote: PriceQuote) -> CacheEntry:
        """Store *quote* for *pair*, replacing any previous entry."""
        entry = CacheEntry(quote=quote, fetched_at=self._clock())
        self._entries[pair] = entry
        return entry

    def __contains__(self, pair: object) -> bool:
        return pair in self._entries

    def __len__(self) -> int:
        return len(self._entries)
