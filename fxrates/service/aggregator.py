"""Server-side batch aggregation behind ``GET /forex-prices``.

Pairs are resolved one after another.  For each pair the three upstream
providers are tried in order, then the server fallback table; a pair the
table does not know is left out of the result.  No pair can fail the batch.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional, Sequence

from fxrates.config import Config
from fxrates.providers.base import QuoteProvider
from fxrates.providers.chain import first_success
from fxrates.providers.exchangerate_api import ExchangeRateApiProvider
from fxrates.providers.frankfurter import FrankfurterProvider
from fxrates.providers.freeforex import FreeForexApiProvider
from fxrates.quotes.cache import utc_now
from fxrates.quotes.fallback import SERVER_FALLBACK_RATES, lookup_fallback
from fxrates.quotes.models import ResolvedRate
from fxrates.quotes.pairs import is_valid_pair_code

logger = logging.getLogger("fxrates.aggregator")

DEFAULT_MAX_PAIRS = 20


class InvalidPairsError(ValueError):
    """The ``pairs`` query parameter is missing or holds no usable code."""


def parse_pairs_param(raw: Optional[str], max_pairs: int = DEFAULT_MAX_PAIRS) -> list[str]:
    """Split and sanitise a comma-separated ``pairs`` parameter.

    Codes are stripped and upper-cased; anything that is not six letters
    is dropped, and at most *max_pairs* codes are kept (in order).

    Raises:
        InvalidPairsError: If *raw* is empty or no valid code remains.
    """
    if raw is None or not raw.strip():
        raise InvalidPairsError("Missing pairs parameter")

    pairs = [p.strip().upper() for p in raw.split(",")]
    pairs = [p for p in pairs if is_valid_pair_code(p)][:max_pairs]

    if not pairs:
        raise InvalidPairsError("No valid currency pairs provided")
    return pairs


class PriceAggregator:
    """Resolves a batch of pair codes, annotating each with its source.

    Args:
        providers: Upstream providers in priority order.
        fallback_rates: Table used when every provider misses.
        clock: Callable returning the current aware ``datetime``.
    """

    def __init__(
        self,
        providers: Sequence[QuoteProvider],
        fallback_rates: Mapping[str, float] = SERVER_FALLBACK_RATES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._providers = list(providers)
        self._fallback_rates = fallback_rates
        self._clock = clock

    @property
    def providers(self) -> list[QuoteProvider]:
        return list(self._providers)

    def timestamp_ms(self) -> int:
        """Current time in epoch milliseconds."""
        return int(self._clock().timestamp() * 1000)

    async def aggregate(self, pairs: Iterable[str]) -> dict[str, ResolvedRate]:
        """Resolve every pair in *pairs*, sequentially."""
        pair_list = list(pairs)
        results: dict[str, ResolvedRate] = {}

        for pair in pair_list:
            winner, attempts = await first_success(self._providers, pair)
            if winner is not None and winner.rate is not None:
                results[pair] = ResolvedRate(pair=pair, rate=winner.rate, source=winner.provider)
                continue

            fallback = lookup_fallback(pair, self._fallback_rates)
            if fallback is not None:
                results[pair] = ResolvedRate(pair=pair, rate=fallback, source="fallback")
            else:
                logger.warning(
                    "No rate for %s after %d attempt(s), omitting",
                    pair, len(attempts),
                )

        fallback_count = sum(1 for r in results.values() if r.source == "fallback")
        logger.info(
            "Aggregated %d/%d pair(s), %d from fallback",
            len(results), len(pair_list), fallback_count,
        )
        return results


def build_server_providers(config: Config) -> list[QuoteProvider]:
    """FreeForexAPI, then ExchangeRate-API, then Frankfurter.

    Uses ``AGGREGATOR_TIMEOUT_SECONDS``, which by default is unset: the
    endpoint imposes no timeout of its own, unlike the 5 s client bound.
    """
    timeout = config.aggregator_timeout_seconds
    return [
        FreeForexApiProvider(timeout=timeout),
        ExchangeRateApiProvider(timeout=timeout),
        FrankfurterProvider(timeout=timeout),
    ]


def build_default_aggregator(config: Config) -> PriceAggregator:
    """Wire a ``PriceAggregator`` from configuration."""
    return PriceAggregator(providers=build_server_providers(config))
