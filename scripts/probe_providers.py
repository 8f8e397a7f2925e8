"""One-shot script that asks every upstream provider for a pair.

Usage (from the project root):
    python -m scripts.probe_providers --pair EURJPY --timeout 5
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fxrates.providers.exchangerate_api import ExchangeRateApiProvider
from fxrates.providers.frankfurter import FrankfurterProvider
from fxrates.providers.freeforex import FreeForexApiProvider
from fxrates.quotes.pairs import canonicalize

logger = logging.getLogger(__name__)


async def _main(pair: str, timeout: float) -> None:
    providers = [
        FreeForexApiProvider(timeout=timeout),
        ExchangeRateApiProvider(timeout=timeout),
        FrankfurterProvider(timeout=timeout),
    ]
    results = await asyncio.gather(*(p.fetch_rate(pair) for p in providers))
    for result in results:
        logger.info(
            "%-16s %s  status=%s rate=%s %s",
            result.provider, result.pair, result.status.value,
            result.rate, result.detail,
        )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Probe each forex quote provider")
    parser.add_argument("--pair", default="EURUSD")
    parser.add_argument("--timeout", type=float, default=5.0)
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    asyncio.run(_main(canonicalize(args.pair), args.timeout))
