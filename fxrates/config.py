"""fxrates: application configuration.

Loads .env variables into a typed config object.
No variable is required; malformed values are rejected on startup.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    cache_ttl_seconds: float
    provider_timeout_seconds: float
    aggregator_timeout_seconds: Optional[float]  # None = no explicit timeout
    max_pairs_per_request: int
    cors_allowed_origins: tuple[str, ...]
    forex_prices_url: Optional[str]
    log_level: str
    api_host: str
    api_port: int


def _positive_float(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _positive_int(name: str, default: str) -> int:
    raw = os.environ.get(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` with a message naming the offending variable when
    a numeric setting is malformed or not positive.
    """
    load_dotenv(dotenv_path=env_path)

    aggregator_timeout: Optional[float] = None
    if os.environ.get("AGGREGATOR_TIMEOUT_SECONDS", "").strip():
        aggregator_timeout = _positive_float("AGGREGATOR_TIMEOUT_SECONDS", "")

    origins = tuple(
        o.strip()
        for o in os.environ.get("CORS_ALLOWED_ORIGINS", "*").split(",")
        if o.strip()
    ) or ("*",)

    return Config(
        cache_ttl_seconds=_positive_float("CACHE_TTL_SECONDS", "60"),
        provider_timeout_seconds=_positive_float("PROVIDER_TIMEOUT_SECONDS", "5"),
        aggregator_timeout_seconds=aggregator_timeout,
        max_pairs_per_request=_positive_int("MAX_PAIRS_PER_REQUEST", "20"),
        cors_allowed_origins=origins,
        forex_prices_url=os.environ.get("FOREX_PRICES_URL", "").strip() or None,
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        api_host=os.environ.get("API_HOST", "0.0.0.0"),
        api_port=_positive_int("API_PORT", "8080"),
    )
