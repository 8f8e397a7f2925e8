"""Client for a deployed ``/forex-prices`` aggregation endpoint.

Lets a client resolver ask the server-side aggregator first, so browsers and
other callers behind restrictive CORS rules still see live rates.
"""

from typing import Optional

from fxrates.providers.base import HttpQuoteProvider, to_positive_float


class ForexPricesEndpointProvider(HttpQuoteProvider):
    """Reads ``rates[PAIR].rate`` from ``GET <base_url>/forex-prices``.

    A pair the endpoint only knows from its own fallback table is treated
    as a miss, so the local chain still gets a chance at a live rate.
    """

    name = "forex-prices"

    def __init__(self, base_url: str, timeout: Optional[float] = 5.0) -> None:
        super().__init__(timeout=timeout)
        self._url = f"{base_url.rstrip('/')}/forex-prices"

    @property
    def url(self) -> str:
        return self._url

    def build_request(self, pair: str) -> tuple[str, Optional[dict]]:
        return self._url, {"pairs": pair}

    def extract_rate(self, pair: str, data: dict) -> Optional[float]:
        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None
        entry = rates.get(pair)
        if not isinstance(entry, dict) or entry.get("source") == "fallback":
            return None
        return to_positive_float(entry.get("rate"))
