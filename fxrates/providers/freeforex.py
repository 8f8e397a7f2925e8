"""FreeForexAPI: pair-keyed live rates.

Response shape::

    {"rates": {"EURUSD": {"rate": 1.0523, "timestamp": 1737072000}}, "code": 200}
"""

from typing import Optional

from fxrates.providers.base import HttpQuoteProvider, to_positive_float

FREEFOREX_URL = "https://www.freeforexapi.com/api/live"


class FreeForexApiProvider(HttpQuoteProvider):
    """Primary provider, keyed by the exact pair code."""

    name = "freeforexapi"

    def __init__(self, timeout: Optional[float] = 5.0, url: str = FREEFOREX_URL) -> None:
        super().__init__(timeout=timeout)
        self._url = url

    def build_request(self, pair: str) -> tuple[str, Optional[dict]]:
        return self._url, {"pairs": pair}

    def extract_rate(self, pair: str, data: dict) -> Optional[float]:
        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None
        entry = rates.get(pair)
        if not isinstance(entry, dict):
            return None
        return to_positive_float(entry.get("rate"))
