"""Display formatting for rates."""

# Legs whose pairs quote in large units and display at 2 decimals.
_TWO_DECIMAL_LEGS = ("JPY", "MXN")


def price_decimals(currency_or_pair: str) -> int:
    code = currency_or_pair.upper()
    return 2 if any(leg in code for leg in _TWO_DECIMAL_LEGS) else 4


def format_price(price: float, currency_or_pair: str) -> str:
    """Format *price* for display: 2 decimals for JPY/MXN, else 4.

    >>> format_price(150.2, "USDJPY")
    '150.20'
    >>> format_price(1.052, "EURUSD")
    '1.0520'
    """
    return f"{price:.{price_decimals(currency_or_pair)}f}"
