# backend/finance_tracker/services/market_data/dolar_api.py
"""
Informal ("blue") ARS/USD exchange rate from dolarapi.com.

    GET /v1/dolares/blue
    {"compra": 1180, "venta": 1200, "casa": "blue", ...}

The valuation engine uses the average of buy and sell.
"""

import logging

import httpx

from finance_tracker.services.exceptions import FXProviderError
from finance_tracker.services.market_data.base import RetryingProvider
from finance_tracker.services.market_data.http import get_json
from finance_tracker.services.valuation.types import ExchangeRateQuote
from finance_tracker.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


class DolarApiProvider(RetryingProvider):
    """Fetches the informal exchange rate quote."""

    def __init__(self, client: httpx.Client, url: str) -> None:
        self._client = client
        self._url = url

    @property
    def name(self) -> str:
        return "dolarapi"

    def get_rate(self) -> ExchangeRateQuote:
        """
        Fetch the current buy/sell quote.

        Raises:
            FXProviderError: If the response lacks a positive buy and sell rate
            ProviderUnavailableError: Network or API error (after retries)
            RateLimitError: Rate limit exceeded (after retries)
        """
        data = self._execute_with_retry(get_json, self._client, self._url, self.name)
        if not isinstance(data, dict):
            raise FXProviderError(self.name, "unexpected response shape")

        try:
            buy = to_decimal(data["compra"])
            sell = to_decimal(data["venta"])
        except (KeyError, TypeError, ArithmeticError) as e:
            raise FXProviderError(self.name, f"missing or invalid rate: {e}") from e

        if buy <= ZERO or sell <= ZERO:
            raise FXProviderError(self.name, f"non-positive rate (buy={buy}, sell={sell})")

        quote = ExchangeRateQuote(buy=buy, sell=sell)
        logger.debug(f"Blue rate: buy={buy} sell={sell} avg={quote.average}")
        return quote
