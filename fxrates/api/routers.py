"""Internal API routers: the /forex-prices aggregation endpoint.

No provider logic here. Delegates to the ``PriceAggregator`` injected at
startup and shapes the JSON/CORS envelope.
"""

import logging
from typing import Optional, Sequence

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, Response

from fxrates.config import load_config
from fxrates.service.aggregator import (
    DEFAULT_MAX_PAIRS,
    InvalidPairsError,
    PriceAggregator,
    build_default_aggregator,
    parse_pairs_param,
)

logger = logging.getLogger("fxrates")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_aggregator: Optional[PriceAggregator] = None  # Set via configure_routers()
_allowed_origins: tuple[str, ...] = ("*",)
_max_pairs: int = DEFAULT_MAX_PAIRS

_CORS_HEADERS = {
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Max-Age": "86400",
}


def configure_routers(
    aggregator: Optional[PriceAggregator],
    allowed_origins: Sequence[str] = ("*",),
    max_pairs: int = DEFAULT_MAX_PAIRS,
) -> None:
    """Inject dependencies from the application startup.

    Args:
        aggregator: A ``PriceAggregator`` (or duck-type for tests).  When
            ``None`` one is built from the environment on first request.
        allowed_origins: CORS origins; ``("*",)`` allows any origin.
        max_pairs: Cap on pair codes honoured per request.
    """
    global _aggregator, _allowed_origins, _max_pairs  # noqa: PLW0603
    _aggregator = aggregator
    _allowed_origins = tuple(allowed_origins) or ("*",)
    _max_pairs = max_pairs


def _get_aggregator() -> PriceAggregator:
    """Return the injected aggregator, wiring one from the environment if
    the app is served without ``configure_routers()`` (e.g. bare uvicorn)."""
    if _aggregator is None:
        config = load_config()
        configure_routers(
            aggregator=build_default_aggregator(config),
            allowed_origins=config.cors_allowed_origins,
            max_pairs=config.max_pairs_per_request,
        )
    return _aggregator


def cors_headers(origin: Optional[str]) -> dict[str, str]:
    """CORS headers for a request from *origin*.

    A listed origin is echoed back; an unlisted one gets the first listed
    origin, which the browser will then reject.
    """
    if "*" in _allowed_origins:
        allow = "*"
    elif origin and origin in _allowed_origins:
        allow = origin
    else:
        allow = _allowed_origins[0]
    return {"Access-Control-Allow-Origin": allow, **_CORS_HEADERS}


def _json(body: dict, status_code: int, origin: Optional[str]) -> JSONResponse:
    return JSONResponse(content=body, status_code=status_code, headers=cors_headers(origin))


# ── Endpoints ────────────────────────────────────────────────────────────


@router.options("/forex-prices")
async def forex_prices_preflight(request: Request):
    """Answer the CORS preflight with an empty body."""
    return Response(status_code=200, headers=cors_headers(request.headers.get("origin")))


@router.get("/forex-prices")
async def get_forex_prices(
    request: Request,
    pairs: Optional[str] = Query(default=None),
):
    """Return ``{"rates": {PAIR: {"rate", "source"}}, "timestamp": ms}``."""
    origin = request.headers.get("origin")

    try:
        pair_list = parse_pairs_param(pairs, max_pairs=_max_pairs)
    except InvalidPairsError as exc:
        return _json({"error": str(exc)}, 400, origin)

    try:
        aggregator = _get_aggregator()
        resolved = await aggregator.aggregate(pair_list)
        body = {
            "rates": {
                pair: {"rate": r.rate, "source": r.source}
                for pair, r in resolved.items()
            },
            "timestamp": aggregator.timestamp_ms(),
        }
    except Exception:
        logger.exception("forex-prices request failed for pairs=%s", pairs)
        return _json({"error": "Internal server error"}, 500, origin)

    return _json(body, 200, origin)


@router.api_route("/forex-prices", methods=["POST", "PUT", "PATCH", "DELETE"])
async def forex_prices_method_not_allowed(request: Request):
    """Only GET and OPTIONS are served."""
    return _json({"error": "Method not allowed"}, 405, request.headers.get("origin"))
