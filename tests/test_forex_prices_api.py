"""Tests for the /forex-prices endpoint and health check."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from fxrates.api.routers import configure_routers
from fxrates.main import app
from fxrates.quotes.models import FetchStatus, ProviderResult
from fxrates.service.aggregator import PriceAggregator

client = TestClient(app)

_FIXED_NOW = datetime(2026, 1, 17, 12, 0, tzinfo=timezone.utc)


# ── Helpers ──────────────────────────────────────────────────────────────


class _StaticProvider:
    def __init__(self, name, rates):
        self.name = name
        self._rates = rates

    def supports(self, pair):
        return True

    async def fetch_rate(self, pair):
        rate = self._rates.get(pair)
        if rate is None:
            return ProviderResult(provider=self.name, pair=pair, status=FetchStatus.NETWORK_ERROR)
        return ProviderResult(provider=self.name, pair=pair, status=FetchStatus.SUCCESS, rate=rate)


def _make_aggregator(free=None, frankfurter=None) -> PriceAggregator:
    return PriceAggregator(
        providers=[
            _StaticProvider("freeforexapi", free or {}),
            _StaticProvider("exchangerate-api", {}),
            _StaticProvider("frankfurter", frankfurter or {}),
        ],
        clock=lambda: _FIXED_NOW,
    )


@pytest.fixture(autouse=True)
def _reset_routers():
    yield
    configure_routers(aggregator=_make_aggregator())


# ── Tests ────────────────────────────────────────────────────────────────


class TestForexPricesGet:
    def test_returns_rates_and_timestamp(self):
        configure_routers(aggregator=_make_aggregator(free={"EURUSD": 1.0301}))
        resp = client.get("/forex-prices?pairs=EURUSD,GBPUSD")
        assert resp.status_code == 200
        data = resp.json()
        assert data["rates"]["EURUSD"] == {"rate": 1.0301, "source": "freeforexapi"}
        assert data["rates"]["GBPUSD"] == {"rate": 1.2195, "source": "fallback"}
        assert data["timestamp"] == int(_FIXED_NOW.timestamp() * 1000)

    def test_bad_code_never_fails_batch(self):
        configure_routers(aggregator=_make_aggregator(frankfurter={"EURUSD": 1.0299}))
        resp = client.get("/forex-prices", params={"pairs": "EURUSD,BADCODE"})
        assert resp.status_code == 200
        rates = resp.json()["rates"]
        assert rates["EURUSD"]["source"] == "frankfurter"
        assert "BADCODE" not in rates

    def test_lowercase_codes_accepted(self):
        configure_routers(aggregator=_make_aggregator())
        resp = client.get("/forex-prices?pairs=usdjpy")
        assert resp.json()["rates"]["USDJPY"]["rate"] == 156.15

    def test_pair_cap(self):
        configure_routers(aggregator=_make_aggregator(), max_pairs=2)
        resp = client.get("/forex-prices?pairs=EURUSD,GBPUSD,USDJPY")
        assert set(resp.json()["rates"]) == {"EURUSD", "GBPUSD"}

    def test_missing_pairs_is_400(self):
        configure_routers(aggregator=_make_aggregator())
        resp = client.get("/forex-prices")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing pairs parameter"}

    def test_no_valid_pairs_is_400(self):
        configure_routers(aggregator=_make_aggregator())
        resp = client.get("/forex-prices?pairs=EUR,BADCODE")
        assert resp.status_code == 400
        assert resp.json() == {"error": "No valid currency pairs provided"}

    def test_unexpected_failure_is_500(self):
        broken = MagicMock()
        broken.aggregate = AsyncMock(side_effect=RuntimeError("boom"))
        configure_routers(aggregator=broken)
        resp = client.get("/forex-prices?pairs=EURUSD")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
        assert resp.headers["access-control-allow-origin"] == "*"


class TestCors:
    def test_preflight(self):
        configure_routers(aggregator=_make_aggregator())
        resp = client.options("/forex-prices", headers={"Origin": "https://any.example"})
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET, OPTIONS"
        assert "content-type" in resp.headers["access-control-allow-headers"]

    def test_get_carries_cors_headers(self):
        configure_routers(aggregator=_make_aggregator())
        resp = client.get("/forex-prices?pairs=EURUSD")
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-max-age"] == "86400"

    def test_listed_origin_is_echoed(self):
        configure_routers(
            aggregator=_make_aggregator(),
            allowed_origins=("https://dash.example", "http://localhost:5173"),
        )
        resp = client.get(
            "/forex-prices?pairs=EURUSD",
            headers={"Origin": "http://localhost:5173"},
        )
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_unlisted_origin_gets_first_listed(self):
        configure_routers(
            aggregator=_make_aggregator(),
            allowed_origins=("https://dash.example",),
        )
        resp = client.options("/forex-prices", headers={"Origin": "https://evil.example"})
        assert resp.headers["access-control-allow-origin"] == "https://dash.example"


class TestMethods:
    def test_post_not_allowed(self):
        configure_routers(aggregator=_make_aggregator())
        resp = client.post("/forex-prices?pairs=EURUSD")
        assert resp.status_code == 405
        assert resp.json() == {"error": "Method not allowed"}
        assert resp.headers["access-control-allow-origin"] == "*"


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_lazy_wiring_applies_env_limits(monkeypatch):
    monkeypatch.setenv("MAX_PAIRS_PER_REQUEST", "1")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://dash.example")
    monkeypatch.setattr(
        "fxrates.api.routers.build_default_aggregator",
        lambda config: _make_aggregator(),
    )
    configure_routers(aggregator=None)

    resp = client.get(
        "/forex-prices?pairs=EURUSD,GBPUSD,USDJPY",
        headers={"Origin": "https://dash.example"},
    )
    assert resp.status_code == 200
    assert set(resp.json()["rates"]) == {"EURUSD"}
    assert resp.headers["access-control-allow-origin"] == "https://dash.example"
