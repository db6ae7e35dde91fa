# backend/finance_tracker/services/platforms.py
"""
Investment platforms and their valuation rules.

Every platform-dependent decision (which currency a quote is in, whether it
needs converting with the exchange rate, how it is labelled in breakdowns,
how its price is keyed) is read from PLATFORM_SPECS instead of comparing
platform strings at each call site.

Enum values are the tags stored by the persistence layer:
    cripto - crypto assets, quoted in USD
    iol    - local-market equities (CEDEARs), quoted in ARS
    usa    - foreign equities, quoted in USD
"""

from dataclasses import dataclass
from enum import Enum


class Currency(str, Enum):
    """Currencies a balance, lot or quote can be denominated in."""
    ARS = "ARS"
    USD = "USD"


LOCAL_CURRENCY = Currency.ARS
REFERENCE_CURRENCY = Currency.USD


class Platform(str, Enum):
    """Where an investment lot is held."""
    CRYPTO = "cripto"
    LOCAL_EQUITY = "iol"
    FOREIGN_EQUITY = "usa"


@dataclass(frozen=True)
class PlatformSpec:
    """
    Valuation rules for one platform.

    Attributes:
        quote_currency: Currency market prices for this platform arrive in
        label: Display label used in composition breakdowns
    """

    quote_currency: Currency
    label: str

    @property
    def converts_from_local(self) -> bool:
        """True if quotes must be divided by the exchange rate to reach USD."""
        return self.quote_currency == LOCAL_CURRENCY


PLATFORM_SPECS: dict[Platform, PlatformSpec] = {
    Platform.CRYPTO: PlatformSpec(quote_currency=Currency.USD, label="Crypto"),
    Platform.LOCAL_EQUITY: PlatformSpec(quote_currency=Currency.ARS, label="CEDEARs"),
    Platform.FOREIGN_EQUITY: PlatformSpec(quote_currency=Currency.USD, label="US Stocks"),
}


def spec_for(platform: Platform) -> PlatformSpec:
    return PLATFORM_SPECS[platform]


def normalize_symbol(symbol: str) -> str:
    """Trim and upper-case an asset symbol."""
    return symbol.strip().upper()


def price_key(platform: Platform, symbol: str) -> str:
    """
    Key a market price by platform and symbol.

    The same ticker can trade on several markets (AAPL in the US and as a
    CEDEAR), so prices are never keyed by symbol alone.

    Example:
        >>> price_key(Platform.LOCAL_EQUITY, "aapl")
        'iol:AAPL'
    """
    return f"{Platform(platform).value}:{normalize_symbol(symbol)}"
