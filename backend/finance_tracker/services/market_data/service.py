# backend/finance_tracker/services/market_data/service.py
"""
Market Data Service: builds the MarketSnapshot the valuation engine consumes.

This service handles:
- Grouping held symbols by platform
- Fetching the exchange rate and each platform's quotes concurrently
- Provider fallback chains (US stocks: Yahoo Finance, then Finnhub)
- Throttling per-symbol providers with a fixed delay between requests
- Serving still-fresh entries from a caller-owned RatesCache

Design Principles:
- Dependency Injection: Providers, breakers, sleep are constructor arguments
- Partial Success: A failing provider or symbol only leaves gaps in the
  snapshot; the engine values those lots at cost
- No valuation logic: the snapshot is raw quotes + rate

Usage:
    from finance_tracker.services.market_data import MarketDataService, RatesCache

    cache = RatesCache(ttl_seconds=settings.rates_cache_ttl_seconds)
    with MarketDataService.from_settings() as service:
        snapshot = service.fetch_snapshot(positions, cache=cache)
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable

import httpx

from finance_tracker.config import settings
from finance_tracker.services.circuit_breaker import CircuitBreaker, CircuitBreakerOpen
from finance_tracker.services.constants import (
    FX_CACHE_KEY,
    LOCAL_MARKET_SUFFIX,
    PROVIDER_FAILURE_THRESHOLD,
    PROVIDER_RECOVERY_TIMEOUT_SECONDS,
)
from finance_tracker.services.exceptions import (
    FXRateError,
    MarketDataError,
    TickerNotFoundError,
)
from finance_tracker.services.market_data.base import QuoteProvider
from finance_tracker.services.market_data.cache import RatesCache
from finance_tracker.services.market_data.coingecko import CoinGeckoProvider
from finance_tracker.services.market_data.dolar_api import DolarApiProvider
from finance_tracker.services.market_data.finnhub import FinnhubProvider
from finance_tracker.services.market_data.yahoo import YahooFinanceProvider
from finance_tracker.services.platforms import Currency, Platform, price_key
from finance_tracker.services.valuation.types import (
    ExchangeRateQuote,
    InvestmentPosition,
    MarketSnapshot,
    PriceQuote,
)

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Fetches quotes and the exchange rate for a set of positions.

    Example:
        service = MarketDataService(
            fx_provider=DolarApiProvider(client, url),
            providers={Platform.CRYPTO: [CoinGeckoProvider(client, url)]},
        )
        snapshot = service.fetch_snapshot(positions)
    """

    def __init__(
            self,
            fx_provider: DolarApiProvider,
            providers: dict[Platform, list[QuoteProvider]],
            request_delay_seconds: float = 0.0,
            max_workers: int = 4,
            sleep: Callable[[float], None] = time.sleep,
            client: httpx.Client | None = None,
    ) -> None:
        """
        Args:
            fx_provider: Source of the exchange rate
            providers: Provider chain per platform, tried in order
            request_delay_seconds: Pause between per-symbol requests
            max_workers: Thread pool size for concurrent platform fetches
            sleep: Sleep function (injected so tests don't wait)
            client: HTTP client owned by this service, closed by close()
        """
        self._fx_provider = fx_provider
        self._providers = providers
        self._delay = request_delay_seconds
        self._max_workers = max(1, max_workers)
        self._sleep = sleep
        self._client = client
        self._breakers: dict[str, CircuitBreaker] = {}

        for provider in [fx_provider, *(p for chain in providers.values() for p in chain)]:
            self._breakers.setdefault(
                provider.name,
                CircuitBreaker(
                    name=provider.name,
                    failure_threshold=PROVIDER_FAILURE_THRESHOLD,
                    recovery_timeout=PROVIDER_RECOVERY_TIMEOUT_SECONDS,
                    excluded_exceptions=(TickerNotFoundError,),
                ),
            )

    @classmethod
    def from_settings(cls, client: httpx.Client | None = None) -> "MarketDataService":
        """Build the default provider wiring from application settings."""
        owned = client is None
        client = client or httpx.Client(timeout=settings.http_timeout_seconds)

        providers: dict[Platform, list[QuoteProvider]] = {
            Platform.CRYPTO: [CoinGeckoProvider(client, settings.coingecko_url)],
            Platform.LOCAL_EQUITY: [
                YahooFinanceProvider(suffix=LOCAL_MARKET_SUFFIX, currency=Currency.ARS),
            ],
            Platform.FOREIGN_EQUITY: [
                YahooFinanceProvider(),
                FinnhubProvider(client, settings.finnhub_url, settings.finnhub_token),
            ],
        }
        return cls(
            fx_provider=DolarApiProvider(client, settings.dolar_api_url),
            providers=providers,
            request_delay_seconds=settings.price_request_delay_seconds,
            max_workers=settings.market_data_max_workers,
            client=client if owned else None,
        )

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def __enter__(self) -> "MarketDataService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def breaker_for(self, provider_name: str) -> CircuitBreaker:
        return self._breakers[provider_name]

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def fetch_snapshot(
            self,
            positions: Iterable[InvestmentPosition],
            cache: RatesCache | None = None,
    ) -> MarketSnapshot:
        """
        Fetch everything needed to value the given positions.

        Args:
            positions: Lots whose symbols need prices
            cache: Optional cache; fresh entries are reused and new results
                are stored

        Returns:
            MarketSnapshot. Symbols no provider could price are absent from
            prices_by_key; exchange_rate is None if the FX source failed.
        """
        symbols_by_platform = self._group_symbols(positions)
        prices: dict[str, PriceQuote] = {}

        pending: dict[Platform, list[str]] = {}
        for platform, symbols in symbols_by_platform.items():
            for symbol in symbols:
                key = price_key(platform, symbol)
                cached = cache.get(key) if cache is not None else None
                if cached is not None:
                    prices[key] = cached
                else:
                    pending.setdefault(platform, []).append(symbol)

        fx_quote = cache.get(FX_CACHE_KEY) if cache is not None else None
        need_fx = fx_quote is None

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            fx_future = executor.submit(self._fetch_exchange_rate) if need_fx else None
            futures = {
                platform: executor.submit(self._fetch_platform, platform, symbols)
                for platform, symbols in pending.items()
            }
            results = {platform: future.result() for platform, future in futures.items()}
            if fx_future is not None:
                fx_quote = fx_future.result()

        for platform, quotes in results.items():
            for symbol, quote in quotes.items():
                key = price_key(platform, symbol)
                prices[key] = quote
                if cache is not None:
                    cache.set(key, quote)

        if need_fx and fx_quote is not None and cache is not None:
            cache.set(FX_CACHE_KEY, fx_quote)

        requested = sum(len(s) for s in symbols_by_platform.values())
        logger.info(
            f"Market snapshot: {len(prices)}/{requested} prices, "
            f"exchange_rate={'ok' if fx_quote else 'unavailable'}"
        )
        return MarketSnapshot(
            prices_by_key=prices,
            exchange_rate=fx_quote.average if fx_quote else None,
            exchange_quote=fx_quote,
        )

    @staticmethod
    def _group_symbols(positions: Iterable[InvestmentPosition]) -> dict[Platform, list[str]]:
        """Distinct symbols per platform, in first-seen order."""
        grouped: dict[Platform, list[str]] = {}
        for position in positions:
            symbols = grouped.setdefault(position.platform, [])
            if position.symbol not in symbols:
                symbols.append(position.symbol)
        return grouped

    # =========================================================================
    # FETCHERS (run in worker threads)
    # =========================================================================

    def _fetch_exchange_rate(self) -> ExchangeRateQuote | None:
        breaker = self._breakers[self._fx_provider.name]
        try:
            with breaker:
                return self._fx_provider.get_rate()
        except (FXRateError, MarketDataError, CircuitBreakerOpen) as e:
            logger.warning(f"Exchange rate unavailable: {e}")
            return None

    def _fetch_platform(self, platform: Platform, symbols: list[str]) -> dict[str, PriceQuote]:
        """Walk the platform's provider chain until every symbol is priced."""
        quotes: dict[str, PriceQuote] = {}
        remaining = list(symbols)

        for provider in self._providers.get(platform, []):
            if not remaining:
                break
            if provider.supports_batch:
                found = self._fetch_batch(provider, remaining)
            else:
                found = self._fetch_each(provider, remaining)
            quotes.update(found)
            remaining = [s for s in remaining if s not in found]

        if remaining:
            logger.warning(
                f"No quote for {platform.value} symbols: {', '.join(remaining)}"
            )
        return quotes

    def _fetch_batch(self, provider: QuoteProvider, symbols: list[str]) -> dict[str, PriceQuote]:
        breaker = self._breakers[provider.name]
        try:
            with breaker:
                batch = provider.get_quotes(symbols)
        except (MarketDataError, CircuitBreakerOpen) as e:
            logger.warning(f"{provider.name} batch failed: {e}")
            return {}
        for symbol, error in batch.failed.items():
            logger.debug(f"{provider.name}: {symbol} failed: {error}")
        return dict(batch.successful)

    def _fetch_each(self, provider: QuoteProvider, symbols: list[str]) -> dict[str, PriceQuote]:
        breaker = self._breakers[provider.name]
        found: dict[str, PriceQuote] = {}

        for index, symbol in enumerate(symbols):
            if index > 0 and self._delay > 0:
                self._sleep(self._delay)
            try:
                with breaker:
                    found[symbol] = provider.get_quote(symbol)
            except CircuitBreakerOpen as e:
                logger.warning(f"Skipping remaining {provider.name} lookups: {e}")
                break
            except MarketDataError as e:
                logger.warning(f"{provider.name}: no quote for {symbol}: {e}")
        return found
