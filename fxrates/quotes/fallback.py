"""Static fallback rates used when every live provider misses.

These are hand-maintained approximations and must be refreshed by a person
from time to time.  Nothing writes to them at runtime.
"""

from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_RATE = 1.0

CLIENT_FALLBACK_RATES: Mapping[str, float] = MappingProxyType({
    "EURUSD": 1.0520,
    "GBPUSD": 1.2750,
    "USDJPY": 149.80,
    "USDCHF": 0.8780,
    "AUDUSD": 0.6450,
    "USDCAD": 1.4020,
    "USDMXN": 20.15,
    "NZDUSD": 0.5920,
    "EURJPY": 158.30,
    "GBPJPY": 190.90,
    "EURGBP": 0.8290,
    "GBPCAD": 1.7880,
    "AUDJPY": 96.60,
    "EURAUD": 1.6390,
    "GBPAUD": 1.9770,
    "EURCAD": 1.4820,
    "NZDJPY": 88.70,
    "CADJPY": 106.80,
})

# Last refreshed 2026-01-17.
SERVER_FALLBACK_RATES: Mapping[str, float] = MappingProxyType({
    "EURUSD": 1.0285,
    "GBPUSD": 1.2195,
    "USDJPY": 156.15,
    "USDCHF": 0.9125,
    "AUDUSD": 0.6185,
    "USDCAD": 1.4445,
    "USDMXN": 20.68,
    "NZDUSD": 0.5595,
    "USDBRL": 6.0650,
    "EURJPY": 160.60,
    "GBPJPY": 190.40,
    "EURGBP": 0.8435,
    "GBPCAD": 1.7620,
    "AUDJPY": 96.55,
    "EURAUD": 1.6635,
    "GBPAUD": 1.9720,
    "EURCAD": 1.4860,
    "NZDJPY": 87.35,
    "CADJPY": 108.10,
})


def lookup_fallback(pair: str, table: Mapping[str, float]) -> Optional[float]:
    """Return the fallback rate for *pair*, or ``None`` if not tabled."""
    return table.get(pair)
