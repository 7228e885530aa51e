"""
ConversionService — the engine's entry point.

Priority chain for a query:
  1. unit / temperature conversion   (sync)
  2. arithmetic expression           (sync)
  3. monetary conversion             (async, live rates)

The host builds one service per process and keeps it: the service owns the
rate caches and their in-flight registries, so sharing the instance is what
makes concurrent lookups for the same currency share one request.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from typing import Callable

from quickcalc.aliases import ALIAS_INDEX, AliasIndex
from quickcalc.config import get_config
from quickcalc.convert import convert_units
from quickcalc.expression import evaluate
from quickcalc.feeds.coingecko import DEFAULT_URL as CRYPTO_URL, CoinGeckoFeed
from quickcalc.feeds.frankfurter import DEFAULT_URL as FX_URL, FrankfurterFeed
from quickcalc.formatting import format_monetary_amount
from quickcalc.models import CalcResult, ParsedQuery
from quickcalc.monetary import CRYPTO_BY_CODE, FIAT_BY_CODE, AssetKind, MonetaryAsset
from quickcalc.parser import parse_query
from quickcalc.rate_cache import DEFAULT_TIMEOUT, RateCache

logger = logging.getLogger(__name__)

FX_CACHE_TTL = 30 * 60.0
CRYPTO_CACHE_TTL = 60.0
MIN_QUERY_LENGTH = 2


def calculate(query: str, index: AliasIndex = ALIAS_INDEX) -> CalcResult | None:
    """Synchronous part of the chain: unit conversion, then arithmetic."""
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return None

    parsed = parse_query(query)
    if parsed:
        conversion = convert_units(parsed, index)
        if conversion:
            return conversion

    return evaluate(query)


class ConversionService:
    """Calculator engine with its own FX / crypto rate caches."""

    def __init__(
        self,
        fx_feed: FrankfurterFeed | None = None,
        crypto_feed: CoinGeckoFeed | None = None,
        fx_ttl: float = FX_CACHE_TTL,
        crypto_ttl: float = CRYPTO_CACHE_TTL,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        index: AliasIndex = ALIAS_INDEX,
    ):
        self.fx_feed = fx_feed or FrankfurterFeed(timeout=timeout)
        self.crypto_feed = crypto_feed or CoinGeckoFeed(timeout=timeout)
        self.index = index
        self.fx_cache: RateCache[str, dict[str, float]] = RateCache(
            "fx", ttl=fx_ttl, timeout=timeout, clock=clock,
        )
        self.crypto_cache: RateCache[str, float] = RateCache(
            "crypto", ttl=crypto_ttl, timeout=timeout, clock=clock,
        )
        logger.info(
            "ConversionService initialized (fx=%s ttl=%.0fs, crypto=%s ttl=%.0fs, timeout=%.1fs)",
            self.fx_feed.name, fx_ttl, self.crypto_feed.name, crypto_ttl, timeout,
        )

    @classmethod
    def from_config(cls, cfg: dict | None = None) -> "ConversionService":
        cfg = cfg or get_config()
        feeds_cfg = cfg.get("feeds", {})
        fx_cfg = feeds_cfg.get("fx", {})
        crypto_cfg = feeds_cfg.get("crypto", {})
        timeout = float(feeds_cfg.get("timeout", DEFAULT_TIMEOUT))

        fx_feed = FrankfurterFeed(url=fx_cfg.get("url", FX_URL), timeout=timeout)
        crypto_feed = CoinGeckoFeed(
            url=crypto_cfg.get("url", CRYPTO_URL),
            api_key=crypto_cfg.get("api_key", ""),
            timeout=timeout,
        )
        return cls(
            fx_feed=fx_feed,
            crypto_feed=crypto_feed,
            fx_ttl=float(fx_cfg.get("ttl_seconds", FX_CACHE_TTL)),
            crypto_ttl=float(crypto_cfg.get("ttl_seconds", CRYPTO_CACHE_TTL)),
            timeout=timeout,
        )

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def calculate(self, query: str) -> CalcResult | None:
        return calculate(query, self.index)

    async def calculate_async(self, query: str) -> CalcResult | None:
        """Full chain, falling back to live monetary conversion."""
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            return None

        local = self.calculate(query)
        if local:
            return local

        parsed = parse_query(query)
        if not parsed:
            return None
        return await self.convert_monetary(parsed)

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------

    async def get_fx_rates(self, base_code: str) -> dict[str, float] | None:
        base = base_code.upper()
        if base not in FIAT_BY_CODE:
            return None
        return await self.fx_cache.get_or_fetch(base, self.fx_feed.fetch_rates)

    async def get_fiat_rate(self, from_code: str, to_code: str) -> float | None:
        """Units of to_code per 1 from_code."""
        src = from_code.upper()
        dst = to_code.upper()
        if src == dst:
            return 1.0

        rates = await self.get_fx_rates(src)
        if not rates:
            return None

        rate = rates.get(dst)
        if rate is None or not math.isfinite(rate) or rate <= 0:
            return None
        return rate

    async def _fetch_crypto_price(self, code: str) -> float | None:
        return await self.crypto_feed.fetch_usd_price(CRYPTO_BY_CODE[code].price_feed_id)

    async def get_crypto_usd_price(self, code: str) -> float | None:
        upper = code.upper()
        asset = CRYPTO_BY_CODE.get(upper)
        if asset is None or not asset.price_feed_id:
            return None

        price = await self.crypto_cache.get_or_fetch(upper, self._fetch_crypto_price)
        if price is None and asset.stablecoin:
            # pegged to USD; not cached so the next call tries the feed again
            logger.info("No live price for stablecoin %s, using 1 USD", upper)
            return 1.0
        return price

    async def get_usd_per_unit(self, asset: MonetaryAsset) -> float | None:
        if asset.kind is AssetKind.FIAT:
            if asset.code == "USD":
                return 1.0
            return await self.get_fiat_rate(asset.code, "USD")
        return await self.get_crypto_usd_price(asset.code)

    # ------------------------------------------------------------------
    # Monetary conversion
    # ------------------------------------------------------------------

    async def convert_monetary(self, parsed: ParsedQuery) -> CalcResult | None:
        src = self.index.find_monetary(parsed.from_phrase)
        dst = self.index.find_monetary(parsed.to_phrase)
        if not src or not dst:
            return None

        if src.same_asset(dst):
            converted = parsed.value
        else:
            src_usd, dst_usd = await asyncio.gather(
                self.get_usd_per_unit(src),
                self.get_usd_per_unit(dst),
            )
            if not src_usd or not dst_usd:
                logger.debug("No USD price for %s or %s", src.code, dst.code)
                return None

            converted = parsed.value * (src_usd / dst_usd)
            if not math.isfinite(converted):
                return None

        return CalcResult(
            input=f"{format_monetary_amount(parsed.value, src)} {src.code}",
            input_label=src.display_label,
            result=f"{format_monetary_amount(converted, dst)} {dst.code}",
            result_label=dst.display_label,
        )

    def clear_caches(self) -> None:
        """Forget every cached rate so the next lookup goes to the feeds."""
        self.fx_cache.clear()
        self.crypto_cache.clear()
        logger.info("Rate caches cleared")

    async def health(self) -> dict:
        """Health check both feeds."""
        results = {}
        for feed in (self.fx_feed, self.crypto_feed):
            try:
                ok = await feed.health_check()
                results[feed.name] = {"healthy": ok, "url": feed.url}
            except Exception as e:
                results[feed.name] = {"healthy": False, "error": str(e)}
        return results

    def get_stats(self) -> dict:
        return {
            "fx": self.fx_cache.get_stats(),
            "crypto": self.crypto_cache.get_stats(),
        }
