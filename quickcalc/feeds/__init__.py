"""
Live price feeds for monetary conversion.
Fiat rate tables from Frankfurter, crypto USD prices from CoinGecko.
"""
from quickcalc.feeds.base import BaseFeed, FeedResponse
from quickcalc.feeds.coingecko import CoinGeckoFeed
from quickcalc.feeds.frankfurter import FrankfurterFeed

__all__ = [
    "BaseFeed",
    "FeedResponse",
    "CoinGeckoFeed",
    "FrankfurterFeed",
]
