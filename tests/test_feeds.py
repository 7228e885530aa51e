"""
Tests for the FX and crypto price feeds.
Run with: pytest tests/test_feeds.py
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from quickcalc.feeds import CoinGeckoFeed, FeedResponse, FrankfurterFeed


def _mock_client(mock_client_cls, status=200, payload=None, side_effect=None):
    mock_resp = MagicMock()
    mock_resp.status_code = status
    mock_resp.json.return_value = payload
    mock_resp.text = "error body"

    mock_client = AsyncMock()
    if side_effect is not None:
        mock_client.get.side_effect = side_effect
    else:
        mock_client.get.return_value = mock_resp
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_client
    return mock_client


# ---------------------------------------------------------------------------
# FeedResponse
# ---------------------------------------------------------------------------

def test_feed_response_defaults():
    """FeedResponse carries ok/error and an empty payload by default."""
    ok = FeedResponse(ok=True, data={"a": 1})
    assert ok.ok
    assert ok.error == ""

    err = FeedResponse(ok=False, error="timeout")
    assert not err.ok
    assert err.data == {}


# ---------------------------------------------------------------------------
# FrankfurterFeed
# ---------------------------------------------------------------------------

def test_frankfurter_init():
    """Trailing slashes are dropped from the base URL."""
    feed = FrankfurterFeed(url="http://fx.local/", timeout=2)
    assert feed.url == "http://fx.local"
    assert feed.timeout == 2
    assert "FrankfurterFeed" in repr(feed)


def test_frankfurter_extract_rates():
    """Only finite positive numeric rates survive."""
    data = {"rates": {"usd": 1.08, "GBP": 0.85, "BAD": "x", "NEG": -1, "ZERO": 0, "FLAG": True}}
    assert FrankfurterFeed._extract_rates(data) == {"USD": 1.08, "GBP": 0.85}
    assert FrankfurterFeed._extract_rates({"rates": []}) is None
    assert FrankfurterFeed._extract_rates({}) is None


@pytest.mark.asyncio
async def test_frankfurter_fetch_rates_success():
    """Rates are returned with the base injected at 1."""
    feed = FrankfurterFeed(url="http://fx.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        client = _mock_client(mock_client_cls, payload={"base": "EUR", "rates": {"USD": 1.08}})
        rates = await feed.fetch_rates("eur")

    assert rates == {"USD": 1.08, "EUR": 1.0}
    args, kwargs = client.get.call_args
    assert args[0] == "http://fx.local/latest"
    assert kwargs["params"] == {"from": "EUR"}


@pytest.mark.asyncio
async def test_frankfurter_http_error():
    """HTTP errors give None."""
    feed = FrankfurterFeed(url="http://fx.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, status=503, payload={})
        assert await feed.fetch_rates("USD") is None


@pytest.mark.asyncio
async def test_frankfurter_timeout():
    """A transport timeout gives None instead of raising."""
    feed = FrankfurterFeed(url="http://fx.local", timeout=1)
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, side_effect=httpx.TimeoutException("timeout"))
        assert await feed.fetch_rates("USD") is None


@pytest.mark.asyncio
async def test_frankfurter_malformed_body():
    """A non-object body or a missing rates field gives None."""
    feed = FrankfurterFeed(url="http://fx.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, payload=["not", "a", "dict"])
        assert await feed.fetch_rates("USD") is None

    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, payload={"message": "not found"})
        assert await feed.fetch_rates("USD") is None


@pytest.mark.asyncio
async def test_frankfurter_health_check():
    feed = FrankfurterFeed(url="http://fx.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, payload={"EUR": "Euro"})
        assert await feed.health_check()


# ---------------------------------------------------------------------------
# CoinGeckoFeed
# ---------------------------------------------------------------------------

def test_coingecko_api_key_from_env(monkeypatch):
    """An ${ENV} api key is resolved and sent as a header."""
    monkeypatch.setenv("QC_TEST_CG_KEY", "demo-123")
    feed = CoinGeckoFeed(api_key="${QC_TEST_CG_KEY}")
    assert feed.api_key == "demo-123"
    assert feed._headers()["x-cg-demo-api-key"] == "demo-123"


def test_coingecko_no_key_no_header():
    feed = CoinGeckoFeed()
    assert "x-cg-demo-api-key" not in feed._headers()


@pytest.mark.parametrize("data,expected", [
    ({"bitcoin": {"usd": 64000}}, 64000.0),
    ({"bitcoin": {"usd": 0}}, None),
    ({"bitcoin": {"usd": -5.0}}, None),
    ({"bitcoin": {"usd": "64000"}}, None),
    ({"bitcoin": {"usd": True}}, None),
    ({"bitcoin": {"eur": 60000}}, None),
    ({"bitcoin": 64000}, None),
    ({}, None),
])
def test_coingecko_extract_usd(data, expected):
    """Only a finite positive data[id]['usd'] counts."""
    assert CoinGeckoFeed._extract_usd(data, "bitcoin") == expected


@pytest.mark.asyncio
async def test_coingecko_fetch_usd_price():
    """Single-id lookup asks for USD and unwraps the price."""
    feed = CoinGeckoFeed(url="http://cg.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        client = _mock_client(mock_client_cls, payload={"bitcoin": {"usd": 64000.5}})
        price = await feed.fetch_usd_price("bitcoin")

    assert price == 64000.5
    args, kwargs = client.get.call_args
    assert args[0] == "http://cg.local/simple/price"
    assert kwargs["params"] == {"ids": "bitcoin", "vs_currencies": "usd"}


@pytest.mark.asyncio
async def test_coingecko_batch_skips_missing_ids():
    """Batch lookups leave out ids without a usable price."""
    feed = CoinGeckoFeed(url="http://cg.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, payload={"bitcoin": {"usd": 64000}, "ethereum": {}})
        prices = await feed.fetch_usd_prices(["bitcoin", "ethereum"])

    assert prices == {"bitcoin": 64000.0}


@pytest.mark.asyncio
async def test_coingecko_empty_batch_makes_no_request():
    feed = CoinGeckoFeed(url="http://cg.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        assert await feed.fetch_usd_prices([]) == {}
        mock_client_cls.assert_not_called()


@pytest.mark.asyncio
async def test_coingecko_connection_error():
    """Any transport error gives None."""
    feed = CoinGeckoFeed(url="http://cg.local")
    with patch("quickcalc.feeds.base.httpx.AsyncClient") as mock_client_cls:
        _mock_client(mock_client_cls, side_effect=httpx.ConnectError("refused"))
        assert await feed.fetch_usd_price("bitcoin") is None
