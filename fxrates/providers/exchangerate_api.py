"""ExchangeRate-API (free tier): all rates for one base currency.

Response shape::

    {"base": "EUR", "date": "2026-01-17", "rates": {"USD": 1.0285, ...}}
"""

from typing import Optional

from fxrates.providers.base import HttpQuoteProvider, to_positive_float
from fxrates.quotes.pairs import split_pair

EXCHANGERATE_API_URL = "https://api.exchangerate-api.com/v4/latest"


class ExchangeRateApiProvider(HttpQuoteProvider):
    """Looks up the quote currency in the base currency's rate sheet."""

    name = "exchangerate-api"

    def __init__(
        self,
        timeout: Optional[float] = 5.0,
        url: str = EXCHANGERATE_API_URL,
    ) -> None:
        super().__init__(timeout=timeout)
        self._url = url.rstrip("/")

    def build_request(self, pair: str) -> tuple[str, Optional[dict]]:
        base, _ = split_pair(pair)
        return f"{self._url}/{base}", None

    def extract_rate(self, pair: str, data: dict) -> Optional[float]:
        _, quote = split_pair(pair)
        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None
        return to_positive_float(rates.get(quote))
