"""CLI quote board: prints resolved rates and trade zones to the console."""

from typing import Mapping

from fxrates.quotes.formatting import format_price
from fxrates.quotes.models import ResolvedRate
from fxrates.risk.trade_zones import compute_trade_zones


def print_quotes(resolved: Mapping[str, ResolvedRate]) -> str:
    """Format and print one line per resolved rate.

    Args:
        resolved: Caller identifier -> ``ResolvedRate``, as returned by
            ``ForexPriceService.resolve_many_quotes``.

    Returns:
        The formatted string (also printed to stdout).
    """
    header = f"  {'Pair':<8} {'Price':>10}  {'Source':<16} {'Entry':<21} {'Target':<21} {'Stop':>10}"
    lines = [
        "──────────────────────────── fxrates Quotes ────────────────────────────",
        header,
    ]
    for r in resolved.values():
        zone = compute_trade_zones(r.rate, r.pair)
        entry = f"{format_price(zone.entry_low, r.pair)}-{format_price(zone.entry_high, r.pair)}"
        target = f"{format_price(zone.target_low, r.pair)}-{format_price(zone.target_high, r.pair)}"
        lines.append(
            f"  {r.pair:<8} {format_price(r.rate, r.pair):>10}  {r.source:<16} "
            f"{entry:<21} {target:<21} {format_price(zone.stop_price, r.pair):>10}"
        )
    lines.append("─" * 73)
    output = "\n".join(lines)
    print(output)
    return output
