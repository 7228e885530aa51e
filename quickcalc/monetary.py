"""
Monetary assets: fiat currencies and crypto assets.

Fiat and crypto live in separate tables but resolve through one alias map
(see aliases.py). Crypto assets carry the CoinGecko id used by the price feed.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class AssetKind(str, enum.Enum):
    FIAT = "fiat"
    CRYPTO = "crypto"


@dataclass(frozen=True)
class MonetaryAsset:
    kind: AssetKind
    code: str
    label: str
    symbol: str
    aliases: tuple[str, ...] = ()
    price_feed_id: str | None = None
    stablecoin: bool = False

    @property
    def is_crypto(self) -> bool:
        return self.kind is AssetKind.CRYPTO

    @property
    def display_label(self) -> str:
        return f"{self.label} (Crypto)" if self.is_crypto else self.label

    def same_asset(self, other: "MonetaryAsset") -> bool:
        return self.kind is other.kind and self.code == other.code


def _fiat(code, label, symbol, aliases) -> MonetaryAsset:
    return MonetaryAsset(AssetKind.FIAT, code, label, symbol, tuple(aliases))


def _crypto(code, label, symbol, feed_id, aliases, stablecoin=False) -> MonetaryAsset:
    return MonetaryAsset(
        AssetKind.CRYPTO, code, label, symbol, tuple(aliases),
        price_feed_id=feed_id, stablecoin=stablecoin,
    )


FIAT_CURRENCIES: tuple[MonetaryAsset, ...] = (
    _fiat("USD", "US Dollar", "$", ["usd", "us dollar", "us dollars", "dollar", "dollars", "$"]),
    _fiat("EUR", "Euro", "€", ["eur", "euro", "euros", "€"]),
    _fiat("GBP", "British Pound", "£", ["gbp", "british pound", "british pounds", "pound sterling", "pounds sterling", "£"]),
    _fiat("JPY", "Japanese Yen", "JPY", ["jpy", "japanese yen", "yen", "jp¥", "¥"]),
    _fiat("INR", "Indian Rupee", "₹", ["inr", "indian rupee", "indian rupees", "rupee", "rupees", "₹"]),
    _fiat("AUD", "Australian Dollar", "A$", ["aud", "australian dollar", "australian dollars", "a$"]),
    _fiat("CAD", "Canadian Dollar", "C$", ["cad", "canadian dollar", "canadian dollars", "c$"]),
    _fiat("CHF", "Swiss Franc", "CHF", ["chf", "swiss franc", "swiss francs"]),
    _fiat("CNY", "Chinese Yuan", "CNY", ["cny", "chinese yuan", "yuan", "renminbi", "rmb", "cn¥"]),
    _fiat("HKD", "Hong Kong Dollar", "HK$", ["hkd", "hong kong dollar", "hong kong dollars", "hk$"]),
    _fiat("SGD", "Singapore Dollar", "S$", ["sgd", "singapore dollar", "singapore dollars", "s$"]),
    _fiat("SEK", "Swedish Krona", "SEK", ["sek", "swedish krona"]),
    _fiat("NOK", "Norwegian Krone", "NOK", ["nok", "norwegian krone"]),
    _fiat("DKK", "Danish Krone", "DKK", ["dkk", "danish krone"]),
    _fiat("PLN", "Polish Zloty", "PLN", ["pln", "polish zloty", "zloty"]),
    _fiat("CZK", "Czech Koruna", "CZK", ["czk", "czech koruna"]),
    _fiat("HUF", "Hungarian Forint", "HUF", ["huf", "hungarian forint", "forint"]),
    _fiat("RON", "Romanian Leu", "RON", ["ron", "romanian leu"]),
    _fiat("BGN", "Bulgarian Lev", "BGN", ["bgn", "bulgarian lev"]),
    _fiat("BRL", "Brazilian Real", "R$", ["brl", "brazilian real", "r$"]),
    _fiat("MXN", "Mexican Peso", "MX$", ["mxn", "mexican peso", "mx$"]),
    _fiat("ZAR", "South African Rand", "ZAR", ["zar", "south african rand", "rand"]),
    _fiat("TRY", "Turkish Lira", "₺", ["try", "turkish lira", "lira", "₺"]),
    _fiat("THB", "Thai Baht", "THB", ["thb", "thai baht", "baht"]),
    _fiat("MYR", "Malaysian Ringgit", "MYR", ["myr", "malaysian ringgit", "ringgit"]),
    _fiat("IDR", "Indonesian Rupiah", "IDR", ["idr", "indonesian rupiah", "rupiah"]),
    _fiat("PHP", "Philippine Peso", "₱", ["php", "philippine peso", "philippine pesos", "₱"]),
    _fiat("KRW", "South Korean Won", "₩", ["krw", "south korean won", "korean won", "won", "₩"]),
    _fiat("ILS", "Israeli New Shekel", "ILS", ["ils", "israeli shekel", "new shekel", "shekel"]),
    _fiat("ISK", "Icelandic Krona", "ISK", ["isk", "icelandic krona"]),
)

CRYPTO_CURRENCIES: tuple[MonetaryAsset, ...] = (
    _crypto("BTC", "Bitcoin", "₿", "bitcoin", ["btc", "bitcoin", "₿"]),
    _crypto("ETH", "Ethereum", "ETH", "ethereum", ["eth", "ethereum"]),
    _crypto("SOL", "Solana", "SOL", "solana", ["sol", "solana"]),
    _crypto("BNB", "BNB", "BNB", "binancecoin", ["bnb", "binance coin", "binancecoin"]),
    _crypto("XRP", "XRP", "XRP", "ripple", ["xrp", "ripple"]),
    _crypto("ADA", "Cardano", "ADA", "cardano", ["ada", "cardano"]),
    _crypto("DOGE", "Dogecoin", "DOGE", "dogecoin", ["doge", "dogecoin"]),
    _crypto("DOT", "Polkadot", "DOT", "polkadot", ["dot", "polkadot"]),
    _crypto("LTC", "Litecoin", "LTC", "litecoin", ["ltc", "litecoin"]),
    _crypto("BCH", "Bitcoin Cash", "BCH", "bitcoin-cash", ["bch", "bitcoin cash"]),
    _crypto("LINK", "Chainlink", "LINK", "chainlink", ["link", "chainlink"]),
    _crypto("AVAX", "Avalanche", "AVAX", "avalanche-2", ["avax", "avalanche"]),
    _crypto("TRX", "TRON", "TRX", "tron", ["trx", "tron"]),
    _crypto("TON", "Toncoin", "TON", "toncoin", ["ton", "toncoin"]),
    _crypto("SHIB", "Shiba Inu", "SHIB", "shiba-inu", ["shib", "shiba", "shiba inu"]),
    _crypto("XLM", "Stellar", "XLM", "stellar", ["xlm", "stellar", "lumens"]),
    _crypto("UNI", "Uniswap", "UNI", "uniswap", ["uni", "uniswap"]),
    _crypto("NEAR", "NEAR Protocol", "NEAR", "near", ["near", "near protocol"]),
    _crypto("ATOM", "Cosmos", "ATOM", "cosmos", ["atom", "cosmos"]),
    _crypto("ICP", "Internet Computer", "ICP", "internet-computer", ["icp", "internet computer"]),
    _crypto("FIL", "Filecoin", "FIL", "filecoin", ["fil", "filecoin"]),
    _crypto("ETC", "Ethereum Classic", "ETC", "ethereum-classic", ["etc", "ethereum classic"]),
    _crypto("MATIC", "Polygon", "MATIC", "matic-network", ["matic", "polygon"]),
    _crypto("USDT", "Tether", "USDT", "tether", ["usdt", "tether"], stablecoin=True),
    _crypto("USDC", "USD Coin", "USDC", "usd-coin", ["usdc", "usd coin"], stablecoin=True),
)

FIAT_BY_CODE: dict[str, MonetaryAsset] = {a.code: a for a in FIAT_CURRENCIES}
CRYPTO_BY_CODE: dict[str, MonetaryAsset] = {a.code: a for a in CRYPTO_CURRENCIES}
