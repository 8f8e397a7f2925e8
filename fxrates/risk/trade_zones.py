"""Trade zone calculation: pure math, no I/O.

Zones are fixed pip distances from the current price:

    ============  ========  =====
    distance      standard  JPY
    ============  ========  =====
    entry buffer  30 pips   50
    target        150 pips  200
    stop          80 pips   100
    ============  ========  =====

Pip size is 0.0001 for standard pairs and 0.01 for JPY pairs.
"""

from fxrates.quotes.models import TradeZone
from fxrates.quotes.pairs import is_jpy_pair, pip_size

# (entry, target, stop) in pips
STANDARD_ZONE_PIPS = (30, 150, 80)
JPY_ZONE_PIPS = (50, 200, 100)

TARGET_LOW_FRACTION = 0.8


def compute_trade_zones(current_price: float, currency_or_pair: str) -> TradeZone:
    """Derive entry, target, and stop levels from *current_price*.

    Formula::

        entry_low   = price - entry_pips  × pip
        entry_high  = price
        target_high = price + target_pips × pip
        target_low  = price + 0.8 × target_pips × pip
        stop_price  = price - stop_pips   × pip

    Args:
        current_price: Latest rate for the pair.
        currency_or_pair: Pair code (``"USDJPY"``) or leg (``"JPY"``).

    Returns:
        A ``TradeZone``; recomputed on every call.
    """
    entry_pips, target_pips, stop_pips = (
        JPY_ZONE_PIPS if is_jpy_pair(currency_or_pair) else STANDARD_ZONE_PIPS
    )
    pip = pip_size(currency_or_pair)

    entry_buffer = entry_pips * pip
    target_distance = target_pips * pip
    stop_distance = stop_pips * pip

    return TradeZone(
        entry_low=current_price - entry_buffer,
        entry_high=current_price,
        target_low=current_price + target_distance * TARGET_LOW_FRACTION,
        target_high=current_price + target_distance,
        stop_price=current_price - stop_distance,
    )
