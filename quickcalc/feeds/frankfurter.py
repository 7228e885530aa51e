"""
Frankfurter FX feed — ECB reference rates, no API key.

GET /latest?from=EUR  ->  {"amount": 1.0, "base": "EUR", "date": "...",
                           "rates": {"USD": 1.08, "GBP": 0.85, ...}}
"""

from __future__ import annotations

import logging
import math

from quickcalc.feeds.base import BaseFeed

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://api.frankfurter.app"


class FrankfurterFeed(BaseFeed):
    """Fiat exchange-rate tables keyed by base currency."""

    def __init__(self, name: str = "frankfurter", url: str = DEFAULT_URL, timeout: float = 5.0):
        super().__init__(name=name, url=url, timeout=timeout)

    @staticmethod
    def _extract_rates(data: dict) -> dict[str, float] | None:
        """
        Pull the `rates` mapping out of a response.
        Entries that aren't finite positive numbers are dropped; a missing
        or non-object `rates` field means the response is unusable.
        """
        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None

        clean: dict[str, float] = {}
        for code, rate in rates.items():
            if isinstance(rate, bool) or not isinstance(rate, (int, float)):
                continue
            if math.isfinite(rate) and rate > 0:
                clean[str(code).upper()] = float(rate)
        return clean

    async def fetch_rates(self, base: str) -> dict[str, float] | None:
        """Rates for 1 unit of `base`, with base -> 1 included."""
        base = base.upper()
        resp = await self._get_json("/latest", params={"from": base})
        if not resp.ok:
            return None

        rates = self._extract_rates(resp.data)
        if rates is None:
            logger.warning("Feed '%s' response for %s has no rates", self.name, base)
            return None

        rates[base] = 1.0
        logger.info("Fetched %d FX rates for %s in %.0fms", len(rates) - 1, base, resp.latency_ms)
        return rates

    async def health_check(self) -> bool:
        resp = await self._get_json("/currencies")
        return resp.ok
