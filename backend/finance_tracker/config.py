# backend/finance_tracker/config.py
"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- LOG_LEVEL / LOG_FORMAT: Logging setup
- FALLBACK_EXCHANGE_RATE: Local-currency-per-USD rate used when no live
  rate is available
- RATES_CACHE_TTL_SECONDS / PRICE_REQUEST_DELAY_SECONDS: Market data fetching

Configuration is validated when the module is imported. Invalid configuration
will raise a ValueError with a descriptive message.

Usage:
    from finance_tracker.config import settings

    engine = ValuationEngine(fallback_exchange_rate=settings.fallback_exchange_rate)
"""
from decimal import Decimal
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Single .env at the project root (parent of backend/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")

    Market Data Settings (optional, with sensible defaults):
        - FALLBACK_EXCHANGE_RATE: Rate substituted when FX data is missing (default: 1500)
        - RATES_CACHE_TTL_SECONDS: Lifetime of cached quotes (default: 300)
        - PRICE_REQUEST_DELAY_SECONDS: Pause between per-symbol fetches (default: 0.3)
        - HTTP_TIMEOUT_SECONDS: Provider request timeout (default: 5)
    """

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format"
    )

    app_name: str = "Household Finance Tracker"

    # =========================================================================
    # EXCHANGE RATE
    # =========================================================================
    fallback_exchange_rate: Decimal = Field(
        default=Decimal("1500"),
        gt=0,
        description="Local-currency-per-USD rate used when no live rate is available"
    )

    # =========================================================================
    # MARKET DATA
    # =========================================================================
    rates_cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0,
        description="Lifetime of cached quotes and exchange rates"
    )
    price_request_delay_seconds: float = Field(
        default=0.3,
        ge=0,
        le=10,
        description="Pause between per-symbol fetches for non-batch sources"
    )
    http_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Timeout for provider HTTP requests"
    )
    market_data_max_workers: int = Field(
        default=4,
        ge=1,
        le=16,
        description="Concurrent platform groups fetched at once"
    )

    dolar_api_url: str = "https://dolarapi.com/v1/dolares/blue"
    coingecko_url: str = "https://api.coingecko.com/api/v3/simple/price"
    finnhub_url: str = "https://finnhub.io/api/v1/quote"
    finnhub_token: str = Field(
        default="demo",
        description="Finnhub API token (the public demo token works for basic quotes)"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Create single instance
settings = Settings()
