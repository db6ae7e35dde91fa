# backend/finance_tracker/services/market_data/__init__.py
"""
Market data package.

Fetches crypto, CEDEAR and US stock quotes plus the informal exchange rate,
and assembles them into the MarketSnapshot the valuation engine consumes.

Architecture:
    market_data/
    ├── base.py         # QuoteProvider ABC, retry policy, QuoteBatch
    ├── http.py         # httpx JSON helper with error mapping
    ├── cache.py        # RatesCache (TTL, caller-owned)
    ├── dolar_api.py    # Exchange rate (dolarapi.com)
    ├── coingecko.py    # Crypto (batch)
    ├── yahoo.py        # US stocks and CEDEARs (yfinance)
    ├── finnhub.py      # US stock fallback
    └── service.py      # MarketDataService (orchestrator)
"""

from finance_tracker.services.market_data.base import (
    QuoteBatch,
    QuoteProvider,
    RetryingProvider,
)
from finance_tracker.services.market_data.cache import RatesCache
from finance_tracker.services.market_data.coingecko import (
    CRYPTO_IDS,
    CoinGeckoProvider,
    coingecko_id,
)
from finance_tracker.services.market_data.dolar_api import DolarApiProvider
from finance_tracker.services.market_data.finnhub import FinnhubProvider
from finance_tracker.services.market_data.service import MarketDataService
from finance_tracker.services.market_data.yahoo import YahooFinanceProvider

__all__ = [
    "QuoteProvider",
    "RetryingProvider",
    "QuoteBatch",
    "RatesCache",
    "CoinGeckoProvider",
    "CRYPTO_IDS",
    "coingecko_id",
    "DolarApiProvider",
    "FinnhubProvider",
    "YahooFinanceProvider",
    "MarketDataService",
]
