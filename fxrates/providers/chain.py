"""Ordered provider fallback: try each provider in turn, stop at the first hit."""

import logging
from typing import Optional, Sequence

from fxrates.providers.base import QuoteProvider
from fxrates.quotes.models import FetchStatus, ProviderResult

logger = logging.getLogger("fxrates.providers")


async def first_success(
    providers: Sequence[QuoteProvider],
    pair: str,
) -> tuple[Optional[ProviderResult], list[ProviderResult]]:
    """Fold over *providers* in priority order until one returns a rate.

    Providers are awaited one after another, never raced.  A provider that
    does not ``supports()`` the pair is recorded as ``SKIPPED`` without a
    call.  An exception escaping a provider is logged and recorded as
    ``ERROR``; it does not stop the fold.

    Returns:
        ``(winning_result, attempts)``.  ``winning_result`` is ``None``
        when every provider missed; ``attempts`` lists every result in
        the order tried.
    """
    attempts: list[ProviderResult] = []

    for provider in providers:
        if not provider.supports(pair):
            attempts.append(ProviderResult(
                provider=provider.name,
                pair=pair,
                status=FetchStatus.SKIPPED,
                detail="pair not covered",
            ))
            continue

        try:
            result = await provider.fetch_rate(pair)
        except Exception as exc:
            logger.exception("%s raised while fetching %s", provider.name, pair)
            result = ProviderResult(
                provider=provider.name,
                pair=pair,
                status=FetchStatus.ERROR,
                detail=str(exc) or exc.__class__.__name__,
            )

        attempts.append(result)
        if result.ok:
            return result, attempts

    return None, attempts
