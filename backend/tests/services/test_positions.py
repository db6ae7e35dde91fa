# backend/tests/services/test_positions.py
"""
Tests for investment lot mutation (buy / sell).
"""

from decimal import Decimal

import pytest

from finance_tracker.services.exceptions import (
    CurrencyMismatchError,
    InsufficientHoldingsError,
    PositionNotFoundError,
    ValidationError,
)
from finance_tracker.services.platforms import Currency, Platform
from finance_tracker.services.positions import (
    PositionAction,
    Trade,
    TradeType,
    apply_trade,
)


def buy(quantity: str, price: str, symbol: str = "ETH",
        platform: Platform = Platform.CRYPTO, currency: Currency = Currency.USD) -> Trade:
    return Trade(platform, symbol, TradeType.BUY, Decimal(quantity), Decimal(price), currency)


def sell(quantity: str, price: str, symbol: str = "ETH",
         platform: Platform = Platform.CRYPTO, currency: Currency = Currency.USD) -> Trade:
    return Trade(platform, symbol, TradeType.SELL, Decimal(quantity), Decimal(price), currency)


class TestTrade:
    """Trade construction validation."""

    def test_symbol_normalized(self):
        assert buy("1", "10", symbol=" eth ").symbol == "ETH"

    def test_total(self):
        assert buy("2.5", "4").total == Decimal("10.0")

    @pytest.mark.parametrize("quantity", ["0", "-1"])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError) as exc_info:
            buy(quantity, "10")
        assert exc_info.value.field == "quantity"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            buy("1", "-10")

    def test_empty_symbol_rejected(self):
        with pytest.raises(ValidationError):
            buy("1", "10", symbol="   ")


class TestBuy:
    """Buying opens or grows a lot at weighted-average cost."""

    def test_first_buy_creates_lot(self):
        change = apply_trade(None, buy("2", "1500"))

        assert change.action == PositionAction.CREATE
        assert change.position.quantity == Decimal("2")
        assert change.position.avg_price == Decimal("1500")
        assert change.position.total_invested == Decimal("3000")

    def test_second_buy_updates_weighted_average(self, position_factory):
        existing = position_factory(Platform.CRYPTO, "ETH", "2", "1500")

        change = apply_trade(existing, buy("2", "2500"))

        assert change.action == PositionAction.UPDATE
        assert change.position.quantity == Decimal("4")
        assert change.position.total_invested == Decimal("8000")
        assert change.position.avg_price == Decimal("2000")

    def test_buy_in_other_currency_rejected(self, position_factory):
        existing = position_factory(
            Platform.LOCAL_EQUITY, "AAPL", "10", "15000", currency=Currency.ARS
        )

        with pytest.raises(CurrencyMismatchError):
            apply_trade(
                existing,
                buy("1", "10", symbol="AAPL", platform=Platform.LOCAL_EQUITY),
            )

    def test_trade_for_other_lot_rejected(self, position_factory):
        existing = position_factory(Platform.CRYPTO, "BTC", "1", "50000")

        with pytest.raises(ValidationError):
            apply_trade(existing, buy("1", "10", symbol="ETH"))


class TestSell:
    """Selling shrinks the lot proportionally or closes it."""

    def test_partial_sell_keeps_average(self, position_factory):
        existing = position_factory(Platform.CRYPTO, "ETH", "4", "2000")

        change = apply_trade(existing, sell("1", "3000"))

        assert change.action == PositionAction.UPDATE
        assert change.position.quantity == Decimal("3")
        assert change.position.avg_price == Decimal("2000")
        assert change.position.total_invested == Decimal("6000")

    def test_sell_everything_deletes_lot(self, position_factory):
        existing = position_factory(Platform.CRYPTO, "ETH", "4", "2000")

        change = apply_trade(existing, sell("4", "3000"))

        assert change.action == PositionAction.DELETE
        assert change.position == existing

    def test_sell_within_tolerance_deletes_lot(self, position_factory):
        """A dust residue at or below 0.0001 is not kept as a lot."""
        existing = position_factory(Platform.CRYPTO, "ETH", "1.00005", "2000")

        change = apply_trade(existing, sell("1", "3000"))

        assert change.action == PositionAction.DELETE

    def test_oversell_by_dust_rejected(self, position_factory):
        """Selling even slightly more than held is rejected, not closed."""
        existing = position_factory(Platform.CRYPTO, "ETH", "1", "2000")

        with pytest.raises(InsufficientHoldingsError) as exc_info:
            apply_trade(existing, sell("1.00005", "3000"))

        assert exc_info.value.requested == Decimal("1.00005")

    def test_residue_above_tolerance_is_kept(self, position_factory):
        existing = position_factory(Platform.CRYPTO, "ETH", "1.001", "2000")

        change = apply_trade(existing, sell("1", "3000"))

        assert change.action == PositionAction.UPDATE
        assert change.position.quantity == Decimal("0.001")

    def test_selling_more_than_held_rejected(self, position_factory):
        existing = position_factory(Platform.CRYPTO, "ETH", "1", "2000")

        with pytest.raises(InsufficientHoldingsError) as exc_info:
            apply_trade(existing, sell("2", "3000"))

        assert exc_info.value.held == Decimal("1")
        assert exc_info.value.requested == Decimal("2")

    def test_selling_without_lot_rejected(self):
        with pytest.raises(PositionNotFoundError) as exc_info:
            apply_trade(None, sell("1", "3000"))

        assert exc_info.value.resource_id == "cripto:ETH"
