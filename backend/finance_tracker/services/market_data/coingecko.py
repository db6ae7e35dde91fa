# backend/finance_tracker/services/market_data/coingecko.py
"""
CoinGecko quote provider for crypto assets.

CoinGecko identifies coins by slug, not ticker, so symbols are mapped through
CRYPTO_IDS. All held coins are priced with a single /simple/price request:

    GET /simple/price?ids=bitcoin,ethereum&vs_currencies=usd&include_24hr_change=true
    {"bitcoin": {"usd": 65000.0, "usd_24h_change": 1.8}, ...}
"""

import logging

import httpx

from finance_tracker.services.exceptions import TickerNotFoundError
from finance_tracker.services.market_data.base import QuoteBatch, QuoteProvider
from finance_tracker.services.market_data.http import get_json
from finance_tracker.services.platforms import Currency, normalize_symbol
from finance_tracker.services.valuation.types import PriceQuote
from finance_tracker.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


# Ticker -> CoinGecko id. Unlisted tickers are not priced.
CRYPTO_IDS: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "USDT": "tether",
    "USDC": "usd-coin",
    "BNB": "binancecoin",
    "SOL": "solana",
    "ADA": "cardano",
    "XRP": "ripple",
    "DOGE": "dogecoin",
    "DOT": "polkadot",
    "LTC": "litecoin",
    "MATIC": "matic-network",
    "AVAX": "avalanche-2",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "ATOM": "cosmos",
    "SHIB": "shiba-inu",
    "ARB": "arbitrum",
    "OP": "optimism",
    "APT": "aptos",
    "NEAR": "near",
    "FIL": "filecoin",
    "AAVE": "aave",
    "MKR": "maker",
    "PEPE": "pepe",
    "WIF": "dogwifcoin",
    "BONK": "bonk",
}


def coingecko_id(symbol: str) -> str | None:
    """Map a ticker to its CoinGecko id, or None if the coin is not listed."""
    return CRYPTO_IDS.get(normalize_symbol(symbol))


class CoinGeckoProvider(QuoteProvider):
    """
    CoinGecko implementation of QuoteProvider.

    Example:
        provider = CoinGeckoProvider(client, settings.coingecko_url)
        batch = provider.get_quotes(["BTC", "ETH"])
        batch.successful["BTC"].price
    """

    supports_batch = True

    def __init__(self, client: httpx.Client, url: str) -> None:
        self._client = client
        self._url = url

    @property
    def name(self) -> str:
        return "coingecko"

    def get_quote(self, symbol: str) -> PriceQuote:
        symbol = normalize_symbol(symbol)
        batch = self.get_quotes([symbol])
        if symbol in batch.failed:
            raise batch.failed[symbol]
        return batch.successful[symbol]

    def get_quotes(self, symbols: list[str]) -> QuoteBatch:
        """
        Price all symbols with one request.

        Transport failures propagate (after retries) since they affect every
        symbol. Unlisted and unknown coins are recorded in QuoteBatch.failed;
        unlisted ones are never sent to CoinGecko.
        """
        batch = QuoteBatch()
        ids_by_symbol: dict[str, str] = {}
        for symbol in (normalize_symbol(s) for s in symbols):
            coin_id = coingecko_id(symbol)
            if coin_id is None:
                logger.debug(f"No CoinGecko id for {symbol}")
                batch.failed[symbol] = TickerNotFoundError(symbol=symbol, provider=self.name)
            else:
                ids_by_symbol[symbol] = coin_id
        if not ids_by_symbol:
            return batch

        ids = sorted(set(ids_by_symbol.values()))
        data = self._execute_with_retry(
            get_json,
            self._client,
            self._url,
            self.name,
            params={
                "ids": ",".join(ids),
                "vs_currencies": "usd",
                "include_24hr_change": "true",
            },
        )
        if not isinstance(data, dict):
            data = {}

        for symbol, coin_id in ids_by_symbol.items():
            quote = self._parse_entry(data.get(coin_id))
            if quote is None:
                batch.failed[symbol] = TickerNotFoundError(symbol=symbol, provider=self.name)
            else:
                batch.successful[symbol] = quote

        logger.debug(
            f"CoinGecko priced {len(batch.successful)}/{len(batch.successful) + len(batch.failed)} "
            f"symbols"
        )
        return batch

    def _parse_entry(self, entry: object) -> PriceQuote | None:
        if not isinstance(entry, dict) or entry.get("usd") is None:
            return None
        try:
            price = to_decimal(entry["usd"])
            change = entry.get("usd_24h_change")
            change_pct = to_decimal(change) if change is not None else ZERO
        except (TypeError, ArithmeticError):
            return None
        if price <= ZERO:
            return None
        return PriceQuote(
            price=price,
            change_24h_percent=change_pct,
            currency=Currency.USD,
            source=self.name,
        )
