"""
CoinGecko crypto price feed.

GET /simple/price?ids=bitcoin&vs_currencies=usd  ->  {"bitcoin": {"usd": 64000.0}}

Works without a key at the public rate limit; a demo key from config
(`feeds.crypto.api_key`, usually "${COINGECKO_API_KEY}") is sent when set.
"""

from __future__ import annotations

import logging
import math

from quickcalc.feeds.base import BaseFeed

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://api.coingecko.com/api/v3"


class CoinGeckoFeed(BaseFeed):
    """USD prices for crypto assets, by CoinGecko id."""

    def __init__(
        self,
        name: str = "coingecko",
        url: str = DEFAULT_URL,
        api_key: str = "",
        timeout: float = 5.0,
    ):
        super().__init__(name=name, url=url, timeout=timeout)
        self.api_key = self._resolve_env(api_key)

    def _headers(self) -> dict:
        headers = super()._headers()
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    @staticmethod
    def _extract_usd(data: dict, feed_id: str) -> float | None:
        """data[feed_id]["usd"] if it is a finite positive number."""
        entry = data.get(feed_id)
        if not isinstance(entry, dict):
            return None
        price = entry.get("usd")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            return None
        if not math.isfinite(price) or price <= 0:
            return None
        return float(price)

    async def fetch_usd_prices(self, feed_ids: list[str]) -> dict[str, float] | None:
        """Batch lookup; ids without a usable price are left out."""
        if not feed_ids:
            return {}
        resp = await self._get_json(
            "/simple/price",
            params={"ids": ",".join(feed_ids), "vs_currencies": "usd"},
        )
        if not resp.ok:
            return None

        prices = {}
        for feed_id in feed_ids:
            price = self._extract_usd(resp.data, feed_id)
            if price is None:
                logger.warning("Feed '%s' has no usable USD price for %s", self.name, feed_id)
                continue
            prices[feed_id] = price
        return prices

    async def fetch_usd_price(self, feed_id: str) -> float | None:
        prices = await self.fetch_usd_prices([feed_id])
        if not prices:
            return None
        return prices.get(feed_id)

    async def health_check(self) -> bool:
        resp = await self._get_json("/ping")
        return resp.ok
