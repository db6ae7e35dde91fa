# backend/tests/services/valuation/test_valuation_calculators.py
"""
Unit tests for the valuation calculators.
"""

from decimal import Decimal

import pytest

from finance_tracker.services.platforms import Currency, Platform
from finance_tracker.services.valuation import (
    ExchangeRateResolver,
    MarketSnapshot,
    PositionValueCalculator,
    PriceQuote,
    change_percent_vs_prior_value,
)


class TestExchangeRateResolver:

    def test_rejects_non_positive_fallback(self):
        with pytest.raises(ValueError, match="fallback_rate must be positive"):
            ExchangeRateResolver(Decimal("0"))

    def test_uses_snapshot_rate(self):
        resolver = ExchangeRateResolver(Decimal("1500"))

        resolved = resolver.resolve(MarketSnapshot(exchange_rate=Decimal("1190")))

        assert resolved.rate == Decimal("1190")
        assert resolved.is_fallback is False

    def test_none_snapshot_uses_fallback(self):
        resolved = ExchangeRateResolver(Decimal("1500")).resolve(None)

        assert resolved.rate == Decimal("1500")
        assert resolved.is_fallback is True


class TestChangePercentVsPriorValue:
    """The 24h percent is measured against the value before the move."""

    def test_rise(self):
        assert change_percent_vs_prior_value(Decimal("110"), Decimal("10")) == Decimal("10")

    def test_fall(self):
        assert change_percent_vs_prior_value(Decimal("90"), Decimal("-10")) == Decimal("-10")

    def test_no_change(self):
        assert change_percent_vs_prior_value(Decimal("100"), Decimal("0")) == Decimal("0")

    def test_non_positive_prior_value_gives_zero(self):
        assert change_percent_vs_prior_value(Decimal("0"), Decimal("0")) == Decimal("0")
        assert change_percent_vs_prior_value(Decimal("10"), Decimal("10")) == Decimal("0")


class TestPositionValueCalculator:

    def test_quote_currency_follows_platform_not_lot(self, position_factory):
        """A CEDEAR quote is divided by the rate even if the lot is in USD."""
        position = position_factory(
            Platform.LOCAL_EQUITY, "MSFT", "2", "10", currency=Currency.USD
        )
        quote = PriceQuote(price=Decimal("30000"), currency=Currency.ARS)

        pv = PositionValueCalculator().calculate(position, quote, Decimal("1000"))

        assert pv.current_value == Decimal("60")
        assert pv.cost_basis == Decimal("0.02")

    def test_negative_change_contribution(self, position_factory):
        position = position_factory(Platform.FOREIGN_EQUITY, "X", "4", "50")
        quote = PriceQuote(price=Decimal("50"), change_24h_percent=Decimal("-2.5"))

        pv = PositionValueCalculator().calculate(position, quote, Decimal("1000"))

        assert pv.change_24h_value == Decimal("-5")
        assert pv.change_24h_percent == Decimal("-2.5")

    def test_no_quote_reports_zero_change(self, position_factory):
        position = position_factory(Platform.FOREIGN_EQUITY, "X", "4", "50")

        pv = PositionValueCalculator().calculate(position, None, Decimal("1000"))

        assert pv.change_24h_percent == Decimal("0")
        assert pv.has_market_price is False
