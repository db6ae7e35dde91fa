# backend/finance_tracker/services/market_data/finnhub.py
"""
Finnhub quote provider, used as the fallback for US stocks.

Response fields used from /quote:
    c   current price (0 when the symbol is unknown)
    dp  percent change vs. previous close
"""

import logging

import httpx

from finance_tracker.services.exceptions import TickerNotFoundError
from finance_tracker.services.market_data.base import QuoteProvider
from finance_tracker.services.market_data.http import get_json
from finance_tracker.services.platforms import Currency
from finance_tracker.services.valuation.types import PriceQuote
from finance_tracker.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


class FinnhubProvider(QuoteProvider):
    """Finnhub implementation of QuoteProvider (USD listings only)."""

    def __init__(self, client: httpx.Client, url: str, token: str) -> None:
        self._client = client
        self._url = url
        self._token = token

    @property
    def name(self) -> str:
        return "finnhub"

    def get_quote(self, symbol: str) -> PriceQuote:
        return self._execute_with_retry(self._fetch_quote, symbol.strip().upper())

    def _fetch_quote(self, symbol: str) -> PriceQuote:
        data = get_json(
            self._client,
            self._url,
            self.name,
            params={"symbol": symbol, "token": self._token},
        )
        if not isinstance(data, dict) or data.get("c") in (None, 0):
            raise TickerNotFoundError(symbol=symbol, provider=self.name)

        try:
            price = to_decimal(data["c"])
            change = data.get("dp")
            change_pct = to_decimal(change) if change is not None else ZERO
        except (TypeError, ArithmeticError) as e:
            raise TickerNotFoundError(symbol=symbol, provider=self.name) from e
        if price <= ZERO:
            raise TickerNotFoundError(symbol=symbol, provider=self.name)

        return PriceQuote(
            price=price,
            change_24h_percent=change_pct,
            currency=Currency.USD,
            source=self.name,
        )
