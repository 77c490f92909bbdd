"""Tests for the currency service and its endpoints."""
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from tours_api.config import Settings
from tours_api.main import app, get_currency_service
from tours_api.services.currency import CurrencyService

PRIMARY = "https://primary.example/latest/MYR"
BACKUP = "https://backup.example/latest/MYR"


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_transport(responses, calls):
    """MockTransport answering each URL with a status/payload pair (or raising)."""
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        calls.append(url)
        result = responses[url]
        if isinstance(result, Exception):
            raise result
        status, payload = result
        return httpx.Response(status, json=payload)

    return httpx.MockTransport(handler)


@pytest.fixture
def config():
    return Settings(
        currency_primary_url=PRIMARY,
        currency_backup_url=BACKUP,
        currency_cache_seconds=6 * 60 * 60,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.mark.asyncio
async def test_rates_from_primary(config, clock):
    calls = []
    transport = make_transport({PRIMARY: (200, {"rates": {"USD": 0.21, "EUR": 0.2}})}, calls)
    service = CurrencyService(config, transport=transport, clock=clock)

    rates = await service.get_exchange_rates()

    assert rates.usd == 0.21
    assert rates.eur == 0.2
    assert rates.from_cache is False
    assert rates.last_updated == clock.now
    assert calls == [PRIMARY]


@pytest.mark.asyncio
async def test_rates_cached_within_ttl(config, clock):
    calls = []
    transport = make_transport({PRIMARY: (200, {"rates": {"USD": 0.21, "EUR": 0.2}})}, calls)
    service = CurrencyService(config, transport=transport, clock=clock)

    await service.get_exchange_rates()
    clock.advance(hours=5)
    cached = await service.get_exchange_rates()

    assert cached.from_cache is True
    assert len(calls) == 1

    clock.advance(hours=2)
    refreshed = await service.get_exchange_rates()

    assert refreshed.from_cache is False
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_backup_used_when_primary_fails(config, clock):
    calls = []
    transport = make_transport({
        PRIMARY: (503, {"error": "unavailable"}),
        BACKUP: (200, {"rates": {"USD": 0.23, "EUR": 0.22}}),
    }, calls)
    service = CurrencyService(config, transport=transport, clock=clock)

    rates = await service.get_exchange_rates()

    assert (rates.usd, rates.eur) == (0.23, 0.22)
    assert calls == [PRIMARY, BACKUP]


@pytest.mark.asyncio
async def test_fallback_when_both_fail(config, clock):
    calls = []
    transport = make_transport({
        PRIMARY: httpx.ConnectTimeout("timed out"),
        BACKUP: (200, {"result": "error"}),
    }, calls)
    service = CurrencyService(config, transport=transport, clock=clock)

    rates = await service.get_exchange_rates()

    assert (rates.usd, rates.eur) == (0.224, 0.214)


@pytest.mark.asyncio
async def test_conversions_round_to_nearest(config, clock):
    calls = []
    transport = make_transport({PRIMARY: (200, {"rates": {"USD": 0.225, "EUR": 0.214}})}, calls)
    service = CurrencyService(config, transport=transport, clock=clock)

    assert await service.convert_to_usd(100) == 23  # 22.5 rounds up
    assert await service.convert_to_eur(100) == 21
    assert await service.convert_to_usd(0) == 0
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_fresh_rates_bypass_cache(config, clock):
    calls = []
    transport = make_transport({PRIMARY: (200, {"rates": {"USD": 0.21, "EUR": 0.2}})}, calls)
    service = CurrencyService(config, transport=transport, clock=clock)

    await service.get_exchange_rates()
    fresh = await service.get_fresh_rates()

    assert fresh.from_cache is False
    assert len(calls) == 2


@pytest.fixture
def currency_client(config, clock):
    calls = []
    transport = make_transport({PRIMARY: (200, {"rates": {"USD": 0.2, "EUR": 0.18}})}, calls)
    service = CurrencyService(config, transport=transport, clock=clock)
    app.dependency_overrides[get_currency_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_rates_endpoint(currency_client):
    response = currency_client.get("/api/currency/rates")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["USD"] == 0.2
    assert data["EUR"] == 0.18
    assert data["baseCurrency"] == "MYR"
    assert "lastUpdated" in data


def test_convert_endpoint(currency_client):
    response = currency_client.get("/api/currency/convert", params={"amount": "150"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["MYR"] == 150
    assert data["USD"] == 30
    assert data["EUR"] == 27
    assert data["rates"] == {"USD": 0.2, "EUR": 0.18}


@pytest.mark.parametrize("params", [{}, {"amount": "abc"}, {"amount": ""}])
def test_convert_endpoint_invalid_amount(currency_client, params):
    response = currency_client.get("/api/currency/convert", params=params)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid amount parameter"}


def test_refresh_endpoint(currency_client):
    response = currency_client.post("/api/currency/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Exchange rates refreshed successfully"
    assert body["data"]["USD"] == 0.2


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"rates": [{"USD": 0.21}, {"EUR": 0.2}]},
    {"rates": {"USD": {"value": 0.21}, "EUR": 0.2}},
    {"rates": {"USD": -0.2, "EUR": 0.2}},
    {"rates": {"USD": True, "EUR": 0.2}},
    ["not", "an", "object"],
])
async def test_malformed_provider_bodies_fall_back(config, clock, payload):
    calls = []
    transport = make_transport({PRIMARY: (200, payload), BACKUP: (200, payload)}, calls)
    service = CurrencyService(config, transport=transport, clock=clock)

    rates = await service.get_exchange_rates()

    assert (rates.usd, rates.eur) == (0.224, 0.214)
    assert calls == [PRIMARY, BACKUP]
