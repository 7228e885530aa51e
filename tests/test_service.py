"""
Tests for the conversion service (priority chain + monetary conversion).
Run with: pytest tests/test_service.py
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from quickcalc.parser import parse_query
from quickcalc.service import ConversionService, calculate


FX_TABLES = {
    "USD": {"EUR": 0.92, "GBP": 0.79},
    "EUR": {"USD": 1 / 0.92, "GBP": 0.86},
    "GBP": {"USD": 1 / 0.79, "EUR": 1.16},
}
CRYPTO_PRICES = {"bitcoin": 60000.0, "ethereum": 3000.0}


def _make_service(fx_tables=FX_TABLES, prices=CRYPTO_PRICES, **kwargs):
    fx_feed = MagicMock()
    fx_feed.name = "fake-fx"

    async def fetch_rates(base):
        table = fx_tables.get(base)
        return None if table is None else {**table, base: 1.0}

    fx_feed.fetch_rates = AsyncMock(side_effect=fetch_rates)

    crypto_feed = MagicMock()
    crypto_feed.name = "fake-crypto"

    async def fetch_usd_price(feed_id):
        return prices.get(feed_id)

    crypto_feed.fetch_usd_price = AsyncMock(side_effect=fetch_usd_price)

    return ConversionService(fx_feed=fx_feed, crypto_feed=crypto_feed, **kwargs)


# ---------------------------------------------------------------------------
# Priority chain
# ---------------------------------------------------------------------------

def test_calculate_units_then_arithmetic():
    """Sync chain answers conversions and expressions."""
    assert calculate("5 km to miles").result == "3.106856 mi"
    assert calculate("(2+2)*2").result == "8"
    assert calculate("$50 to EUR") is None


@pytest.mark.parametrize("query", ["", " ", "5", "  7  "])
def test_calculate_short_queries(query):
    """Queries shorter than two characters give None."""
    assert calculate(query) is None


@pytest.mark.asyncio
async def test_calculate_async_prefers_units_without_network():
    """Unit conversions never touch the feeds."""
    service = _make_service()
    result = await service.calculate_async("100 c to f")
    assert result.result == "212 °F"
    service.fx_feed.fetch_rates.assert_not_awaited()
    service.crypto_feed.fetch_usd_price.assert_not_awaited()


@pytest.mark.asyncio
async def test_calculate_async_unresolved_makes_no_calls():
    """Unknown phrases give None without any network traffic."""
    service = _make_service()
    assert await service.calculate_async("5 foo to bar") is None
    assert await service.calculate_async("hello world") is None
    service.fx_feed.fetch_rates.assert_not_awaited()
    service.crypto_feed.fetch_usd_price.assert_not_awaited()


# ---------------------------------------------------------------------------
# Monetary conversion
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_dollars_to_euros():
    """$50 at 0.92 EUR/USD is 46 EUR."""
    service = _make_service()
    result = await service.calculate_async("$50 to EUR")
    assert result.input == "50 USD"
    assert result.input_label == "US Dollar"
    assert result.result == "46 EUR"
    assert result.result_label == "Euro"
    service.fx_feed.fetch_rates.assert_awaited_once_with("EUR")


@pytest.mark.asyncio
async def test_same_asset_shortcut():
    """Converting an asset to itself needs no rates at all."""
    service = _make_service()

    fiat = await service.calculate_async("12.5 usd to dollars")
    assert fiat.input == "12.5 USD"
    assert fiat.result == fiat.input

    crypto = await service.calculate_async("1 btc to bitcoin")
    assert crypto.result == "1 BTC"
    assert crypto.result_label == "Bitcoin (Crypto)"

    service.fx_feed.fetch_rates.assert_not_awaited()
    service.crypto_feed.fetch_usd_price.assert_not_awaited()


@pytest.mark.asyncio
async def test_crypto_to_crypto():
    """Crypto pairs convert through their USD prices."""
    service = _make_service()
    result = await service.calculate_async("0.5 btc in eth")
    assert result.input == "0.5 BTC"
    assert result.input_label == "Bitcoin (Crypto)"
    assert result.result == "10 ETH"
    assert result.result_label == "Ethereum (Crypto)"


@pytest.mark.asyncio
async def test_crypto_to_fiat():
    """BTC to EUR goes BTC -> USD -> EUR."""
    service = _make_service()
    result = await service.calculate_async("1 bitcoin to euro")
    assert result.result == "55,200 EUR"


@pytest.mark.asyncio
async def test_stablecoin_falls_back_to_one_dollar():
    """A stablecoin with no live price is valued at 1 USD, and that isn't cached."""
    service = _make_service(prices={})
    result = await service.calculate_async("10 usdt to usd")
    assert result.result == "10 USD"
    assert service.crypto_cache.peek("USDT") is None

    await service.calculate_async("10 usdt to usd")
    assert service.crypto_feed.fetch_usd_price.await_count == 2


@pytest.mark.asyncio
async def test_missing_price_gives_none():
    """No price for a non-stablecoin means no result."""
    service = _make_service(prices={})
    assert await service.calculate_async("1 btc to usd") is None


@pytest.mark.asyncio
async def test_fx_failure_gives_none():
    """A failed rate table means no result, and it's retried next time."""
    service = _make_service(fx_tables={})
    assert await service.calculate_async("$50 to EUR") is None
    assert await service.calculate_async("$50 to EUR") is None
    assert service.fx_feed.fetch_rates.await_count == 2


@pytest.mark.asyncio
async def test_missing_target_rate_gives_none():
    """A table without the wanted currency means no result."""
    service = _make_service(fx_tables={"JPY": {"EUR": 0.006}})
    assert await service.get_fiat_rate("JPY", "USD") is None
    assert await service.get_fiat_rate("JPY", "EUR") == 0.006


@pytest.mark.asyncio
async def test_rates_are_cached_between_queries():
    """A second query for the same base reuses the cached table."""
    service = _make_service()
    await service.calculate_async("$50 to EUR")
    await service.calculate_async("$10 to EUR")
    assert service.fx_feed.fetch_rates.await_count == 1
    assert service.get_stats()["fx"]["hits"] == 1


@pytest.mark.asyncio
async def test_concurrent_queries_share_one_fetch():
    """Concurrent queries needing EUR rates make a single request."""
    service = _make_service()
    results = await asyncio.gather(
        service.calculate_async("$50 to EUR"),
        service.calculate_async("10 eur to usd"),
        service.calculate_async("€3 to dollars"),
    )
    assert all(r is not None for r in results)
    assert service.fx_feed.fetch_rates.await_count == 1


@pytest.mark.asyncio
async def test_convert_monetary_direct():
    """convert_monetary works on a parsed query."""
    service = _make_service()
    result = await service.convert_monetary(parse_query("100 usd to gbp"))
    assert result.result == "79 GBP"


@pytest.mark.asyncio
async def test_get_fx_rates_rejects_non_fiat():
    service = _make_service()
    assert await service.get_fx_rates("BTC") is None
    service.fx_feed.fetch_rates.assert_not_awaited()


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_clear_caches_forces_refetch():
    """After clear_caches the next query asks the feed again."""
    service = _make_service()
    await service.calculate_async("$50 to EUR")
    service.clear_caches()
    assert service.fx_cache.peek("EUR") is None
    await service.calculate_async("$50 to EUR")
    assert service.fx_feed.fetch_rates.await_count == 2


@pytest.mark.asyncio
async def test_health_reports_each_feed():
    """health() checks both feeds and turns errors into unhealthy entries."""
    service = _make_service()
    service.fx_feed.url = "http://fx.local"
    service.fx_feed.health_check = AsyncMock(return_value=True)
    service.crypto_feed.health_check = AsyncMock(side_effect=RuntimeError("boom"))

    results = await service.health()
    assert results["fake-fx"] == {"healthy": True, "url": "http://fx.local"}
    assert results["fake-crypto"]["healthy"] is False
    assert results["fake-crypto"]["error"] == "boom"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_from_config():
    """Feeds, TTLs and timeout come from the config mapping."""
    cfg = {
        "feeds": {
            "timeout": 2,
            "fx": {"url": "http://fx.local", "ttl_seconds": 10},
            "crypto": {"url": "http://cg.local", "api_key": "k", "ttl_seconds": 5},
        },
    }
    service = ConversionService.from_config(cfg)
    assert service.fx_feed.url == "http://fx.local"
    assert service.crypto_feed.url == "http://cg.local"
    assert service.crypto_feed.api_key == "k"
    assert service.fx_cache.ttl == 10.0
    assert service.crypto_cache.ttl == 5.0
    assert service.fx_cache.timeout == 2.0


def test_from_config_defaults():
    """Missing keys fall back to the public endpoints."""
    service = ConversionService.from_config({"feeds": {}})
    assert service.fx_feed.url == "https://api.frankfurter.app"
    assert service.crypto_feed.url == "https://api.coingecko.com/api/v3"
    assert service.fx_cache.ttl == 1800.0
    assert service.crypto_cache.ttl == 60.0
