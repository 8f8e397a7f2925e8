"""Frankfurter (ECB reference rates): a single base -> quote conversion.

Response shape::

    {"amount": 1.0, "base": "EUR", "date": "2026-01-16", "rates": {"USD": 1.0285}}
"""

from typing import Optional

from fxrates.providers.base import HttpQuoteProvider, to_positive_float
from fxrates.quotes.pairs import is_jpy_pair, is_usd_pair, split_pair

FRANKFURTER_URL = "https://api.frankfurter.app/latest"


class FrankfurterProvider(HttpQuoteProvider):
    """Cross-rate provider.

    Args:
        timeout: Per-request timeout in seconds (``None`` = unbounded).
        skip_jpy_crosses: When set, JPY pairs without a USD leg are
            reported as unsupported and never requested.
    """

    name = "frankfurter"

    def __init__(
        self,
        timeout: Optional[float] = 5.0,
        skip_jpy_crosses: bool = False,
        url: str = FRANKFURTER_URL,
    ) -> None:
        super().__init__(timeout=timeout)
        self._skip_jpy_crosses = skip_jpy_crosses
        self._url = url

    def supports(self, pair: str) -> bool:
        if self._skip_jpy_crosses and is_jpy_pair(pair):
            return is_usd_pair(pair)
        return True

    def build_request(self, pair: str) -> tuple[str, Optional[dict]]:
        base, quote = split_pair(pair)
        return self._url, {"from": base, "to": quote}

    def extract_rate(self, pair: str, data: dict) -> Optional[float]:
        _, quote = split_pair(pair)
        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None
        return to_positive_float(rates.get(quote))
