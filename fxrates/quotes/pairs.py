"""Currency pair codes: canonical form, splitting, and pip metadata.

Currencies quoted against the dollar as ``USDxxx`` are listed in
``USD_BASE_CURRENCIES``; every other single leg is quoted as ``xxxUSD``.
Six-letter codes are already pairs and pass through untouched.
"""

import re

USD_BASE_CURRENCIES: frozenset[str] = frozenset({"JPY", "CAD", "MXN", "CHF"})

CROSS_PAIRS: tuple[str, ...] = (
    "EURJPY",
    "GBPJPY",
    "EURGBP",
    "GBPCAD",
    "AUDJPY",
    "EURAUD",
    "GBPAUD",
    "EURCAD",
    "NZDJPY",
    "CADJPY",
)

_PAIR_RE = re.compile(r"^[A-Z]{6}$")
_LEG_RE = re.compile(r"^[A-Z]{3}$")

STANDARD_PIP = 0.0001
JPY_PIP = 0.01


def is_valid_pair_code(code: str) -> bool:
    """Return ``True`` if *code* is exactly six upper-case letters."""
    return bool(_PAIR_RE.match(code))


def canonicalize(pair_or_currency: str) -> str:
    """Map a currency leg or pair code onto its ``BASEQUOTE`` pair code.

    Examples::

        canonicalize("JPY")     -> "USDJPY"
        canonicalize("eur")     -> "EURUSD"
        canonicalize("GBPJPY")  -> "GBPJPY"

    Raises:
        ValueError: If the input is neither a 3-letter leg nor a
            6-letter pair code.
    """
    code = pair_or_currency.strip().upper()
    if is_valid_pair_code(code):
        return code
    if _LEG_RE.match(code):
        if code in USD_BASE_CURRENCIES:
            return f"USD{code}"
        return f"{code}USD"
    raise ValueError(f"Not a currency or pair code: '{pair_or_currency}'")


def split_pair(pair: str) -> tuple[str, str]:
    """Split a 6-letter pair code into ``(base, quote)``."""
    if not is_valid_pair_code(pair):
        raise ValueError(f"Not a 6-letter pair code: '{pair}'")
    return pair[:3], pair[3:]


def is_jpy_pair(code: str) -> bool:
    """JPY pairs (or the JPY leg itself) use 2-decimal pricing."""
    return "JPY" in code.upper()


def is_usd_pair(code: str) -> bool:
    return "USD" in code.upper()


def pip_size(code: str) -> float:
    """Return the pip size for a pair or leg: 0.01 for JPY, else 0.0001."""
    return JPY_PIP if is_jpy_pair(code) else STANDARD_PIP
