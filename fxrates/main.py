"""fxrates: application entry point.

Boots the FastAPI aggregation server and provides the CLI entry point for
serve and quote modes.
"""

import logging

from fastapi import FastAPI

from fxrates.api.routers import router

app = FastAPI(title="fxrates API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("fxrates")


@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli() -> None:
    """Parse CLI arguments and dispatch to the appropriate mode."""
    import argparse
    import asyncio

    from fxrates.api.routers import configure_routers
    from fxrates.config import load_config
    from fxrates.service.aggregator import build_default_aggregator

    parser = argparse.ArgumentParser(description="fxrates forex price service")
    parser.add_argument(
        "--mode",
        choices=["serve", "quote"],
        default="serve",
        help="Run the HTTP API or print quotes once (default: serve)",
    )
    parser.add_argument(
        "--pairs",
        default="EUR,GBP,JPY,CHF,AUD,CAD",
        help="Comma-separated legs or pair codes for --mode quote",
    )
    args = parser.parse_args()

    config = load_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.mode == "quote":
        identifiers = [p.strip() for p in args.pairs.split(",") if p.strip()]
        asyncio.run(_run_quotes(config, identifiers))
        return

    configure_routers(
        aggregator=build_default_aggregator(config),
        allowed_origins=config.cors_allowed_origins,
        max_pairs=config.max_pairs_per_request,
    )
    asyncio.run(_run_server(config))


async def _run_server(config) -> None:
    """Serve the API until interrupted."""
    import uvicorn

    uvi_config = uvicorn.Config(
        app,
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower(),
    )
    server = uvicorn.Server(uvi_config)

    logger.info("Serving /forex-prices on http://%s:%d", config.api_host, config.api_port)
    if config.aggregator_timeout_seconds is None:
        logger.info("Aggregator provider calls have no explicit timeout")
    await server.serve()


async def _run_quotes(config, identifiers: list[str]) -> None:
    """Resolve *identifiers* once and print the quote board."""
    from fxrates.cli.quotes import print_quotes
    from fxrates.service.price_service import build_default_service

    service = build_default_service(config)
    resolved = await service.resolve_many_quotes(identifiers)
    print_quotes(resolved)


if __name__ == "__main__":
    _run_cli()
