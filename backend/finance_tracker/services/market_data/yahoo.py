# backend/finance_tracker/services/market_data/yahoo.py
"""
Yahoo Finance quote provider.

Uses the yfinance library to read the last price and the previous close of a
listing; the 24h change is derived from the two. Serves both US stocks (no
suffix, quoted in USD) and CEDEARs (".BA" suffix, quoted in ARS).

Limitations:
- Rate limits exist but are not documented
- Prices may be delayed 15-20 minutes
"""

import logging
import math
from decimal import Decimal
from typing import Any

import yfinance as yf

from finance_tracker.services.exceptions import (
    ProviderUnavailableError,
    RateLimitError,
    TickerNotFoundError,
)
from finance_tracker.services.market_data.base import QuoteProvider
from finance_tracker.services.platforms import Currency
from finance_tracker.services.valuation.types import PriceQuote
from finance_tracker.utils.money import HUNDRED, ZERO

logger = logging.getLogger(__name__)


class YahooFinanceProvider(QuoteProvider):
    """
    Yahoo Finance implementation of QuoteProvider.

    Configuration:
        suffix: Exchange suffix appended to every symbol ("" for US,
            ".BA" for Buenos Aires listings)
        currency: Currency the listing trades in

    Example:
        us = YahooFinanceProvider()
        cedears = YahooFinanceProvider(suffix=".BA", currency=Currency.ARS)
        print(cedears.get_quote("AAPL").price)
    """

    def __init__(self, suffix: str = "", currency: Currency = Currency.USD) -> None:
        self._suffix = suffix
        self._currency = currency

    @property
    def name(self) -> str:
        return f"yahoo{self._suffix.lower()}" if self._suffix else "yahoo"

    def get_quote(self, symbol: str) -> PriceQuote:
        return self._execute_with_retry(self._fetch_quote, symbol)

    def _fetch_quote(self, symbol: str) -> PriceQuote:
        """Internal method to fetch one quote (called by retry wrapper)."""
        symbol = symbol.strip().upper()
        yahoo_symbol = f"{symbol}{self._suffix}"
        logger.debug(f"Fetching quote for {yahoo_symbol}")

        try:
            fast_info = yf.Ticker(yahoo_symbol).fast_info
            price = self._to_decimal(fast_info.last_price)
            previous_close = self._to_decimal(fast_info.previous_close)
        except Exception as e:
            error_str = str(e).lower()
            if "not found" in error_str or "no data" in error_str or "delisted" in error_str:
                raise TickerNotFoundError(symbol=symbol, provider=self.name) from e
            if "rate limit" in error_str or "too many requests" in error_str:
                raise RateLimitError(provider=self.name) from e

            logger.error(f"Yahoo Finance error for {yahoo_symbol}: {e}")
            raise ProviderUnavailableError(provider=self.name, reason=str(e)) from e

        if price is None or price <= ZERO:
            raise TickerNotFoundError(symbol=symbol, provider=self.name)

        change = ZERO
        if previous_close is not None and previous_close > ZERO:
            change = (price - previous_close) / previous_close * HUNDRED

        return PriceQuote(
            price=price,
            change_24h_percent=change,
            currency=self._currency,
            source=self.name,
        )

    @staticmethod
    def _to_decimal(value: Any) -> Decimal | None:
        """Convert a value to Decimal, returning None for NaN/None."""
        if value is None:
            return None
        try:
            if math.isnan(float(value)):
                return None
            return Decimal(str(value))
        except (TypeError, ValueError):
            return None
