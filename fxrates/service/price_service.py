"""Forex price resolver: cache, ordered provider fallback, static table.

``resolve`` never raises.  Every failure degrades to a less fresh number:
live provider -> fallback table -> neutral default of 1.0.
"""

import asyncio
import logging
from typing import Iterable, Mapping, Optional, Sequence

from fxrates.config import Config
from fxrates.providers.base import QuoteProvider
from fxrates.providers.chain import first_success
from fxrates.providers.endpoint import ForexPricesEndpointProvider
from fxrates.providers.frankfurter import FrankfurterProvider
from fxrates.providers.freeforex import FreeForexApiProvider
from fxrates.quotes.cache import PriceCache
from fxrates.quotes.fallback import CLIENT_FALLBACK_RATES, DEFAULT_RATE, lookup_fallback
from fxrates.quotes.models import PriceQuote, ResolvedRate
from fxrates.quotes.pairs import canonicalize

logger = logging.getLogger("fxrates.price_service")


class ForexPriceService:
    """Resolves a currency leg or pair code to a usable exchange rate.

    Args:
        providers: Quote providers in priority order.
        cache: The ``PriceCache`` this service reads and refreshes.
        fallback_rates: Static table consulted when every provider misses.
    """

    def __init__(
        self,
        providers: Sequence[QuoteProvider],
        cache: PriceCache,
        fallback_rates: Mapping[str, float] = CLIENT_FALLBACK_RATES,
    ) -> None:
        self._providers = list(providers)
        self._cache = cache
        self._fallback_rates = fallback_rates

    @property
    def providers(self) -> list[QuoteProvider]:
        return list(self._providers)

    @property
    def cache(self) -> PriceCache:
        return self._cache

    async def resolve(self, pair_or_currency: str) -> float:
        """Return the current rate for *pair_or_currency*."""
        resolved = await self.resolve_quote(pair_or_currency)
        return resolved.rate

    async def resolve_quote(self, pair_or_currency: str) -> ResolvedRate:
        """Resolve a rate and report which tier produced it.

        ``source`` is the winning provider's name, ``"fallback"`` for the
        static table, or ``"default"`` for the neutral 1.0.  ``cached`` is
        ``True`` when the rate came from a fresh cache entry.  Anything that
        is not a currency or pair code, ``None`` included, resolves to the
        default rate.
        """
        identifier = pair_or_currency if isinstance(pair_or_currency, str) else ""
        try:
            pair = canonicalize(identifier)
        except ValueError as exc:
            logger.warning("Cannot resolve %r: %s", pair_or_currency, exc)
            return ResolvedRate(pair=str(pair_or_currency), rate=DEFAULT_RATE, source="default")

        entry = self._cache.get(pair)
        if entry is not None:
            return ResolvedRate(pair=pair, rate=entry.quote.rate, source="cache", cached=True)

        result, attempts = await first_success(self._providers, pair)
        if result is not None and result.rate is not None:
            self._cache.put(pair, PriceQuote(rate=result.rate, timestamp=self._cache.now()))
            logger.info("Fetched %s: %s from %s", pair, result.rate, result.provider)
            return ResolvedRate(pair=pair, rate=result.rate, source=result.provider)

        summary = ", ".join(f"{a.provider}={a.status.value}" for a in attempts) or "no providers"
        fallback = lookup_fallback(pair, self._fallback_rates)
        if fallback is not None:
            logger.info("Using fallback price for %s (%s)", pair, summary)
            return ResolvedRate(pair=pair, rate=fallback, source="fallback")

        logger.warning("No rate for %s, using default %.1f (%s)", pair, DEFAULT_RATE, summary)
        return ResolvedRate(pair=pair, rate=DEFAULT_RATE, source="default")

    async def resolve_many(self, identifiers: Iterable[str]) -> dict[str, float]:
        """Resolve several identifiers concurrently.

        Keys are the identifiers exactly as passed in.  Each one falls back
        independently; there is no batch-level failure.
        """
        ids = list(identifiers)
        rates = await asyncio.gather(*(self.resolve(i) for i in ids))
        return dict(zip(ids, rates))

    async def resolve_many_quotes(self, identifiers: Iterable[str]) -> dict[str, ResolvedRate]:
        """Like :meth:`resolve_many` but keeps the source of each rate."""
        ids = list(identifiers)
        resolved = await asyncio.gather(*(self.resolve_quote(i) for i in ids))
        return dict(zip(ids, resolved))


def build_client_providers(config: Config) -> list[QuoteProvider]:
    """Provider chain for the client-side resolver.

    The aggregation endpoint goes first when ``FOREX_PRICES_URL`` is set,
    then FreeForexAPI, then Frankfurter (JPY crosses excluded).
    """
    timeout = config.provider_timeout_seconds
    providers: list[QuoteProvider] = []
    if config.forex_prices_url:
        providers.append(ForexPricesEndpointProvider(config.forex_prices_url, timeout=timeout))
    providers.append(FreeForexApiProvider(timeout=timeout))
    providers.append(FrankfurterProvider(timeout=timeout, skip_jpy_crosses=True))
    return providers


def build_default_service(
    config: Config,
    cache: Optional[PriceCache] = None,
) -> ForexPriceService:
    """Wire a ``ForexPriceService`` from configuration."""
    return ForexPriceService(
        providers=build_client_providers(config),
        cache=cache or PriceCache(ttl_seconds=config.cache_ttl_seconds),
    )
