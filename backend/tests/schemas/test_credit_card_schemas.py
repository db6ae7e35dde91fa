# backend/tests/schemas/test_credit_card_schemas.py
"""
Tests for credit card purchase and installment schemas.

This module tests:
- Field constraints (amount, installments, closing day)
- Borrower rules for purchases made for someone else
- Installment rows generated from a purchase
- Statement month validation on installment rows
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from finance_tracker.schemas.credit_cards import CardInstallmentRecord, CreditCardPurchase


def purchase(**overrides) -> CreditCardPurchase:
    data = {
        "description": "Heladera",
        "card_name": "Visa",
        "purchase_date": date(2024, 12, 20),
        "closing_day": 15,
        "total_amount": Decimal("1000"),
        "installments": 3,
    }
    data.update(overrides)
    return CreditCardPurchase(**data)


# =============================================================================
# PURCHASE TESTS
# =============================================================================

class TestCreditCardPurchase:
    """Tests for CreditCardPurchase schema."""

    def test_defaults(self):
        p = purchase(installments=1)

        assert p.currency.value == "ARS"
        assert p.is_own_expense is True
        assert p.borrower_name is None

    @pytest.mark.parametrize("field,value", [
        ("total_amount", Decimal("0")),
        ("installments", 0),
        ("closing_day", 0),
        ("closing_day", 32),
        ("description", ""),
    ])
    def test_constraints(self, field, value):
        with pytest.raises(ValidationError):
            purchase(**{field: value})

    def test_borrower_required_for_others(self):
        """Should reject a purchase for someone else without a borrower."""
        with pytest.raises(ValidationError):
            purchase(is_own_expense=False, borrower_name="   ")

    def test_borrower_dropped_for_own_expense(self):
        p = purchase(is_own_expense=True, borrower_name="Ana")
        assert p.borrower_name is None

    def test_first_statement_month(self):
        """Should move a purchase after the closing day to the next statement."""
        assert purchase().first_statement_month() == "2025-01"
        assert purchase(purchase_date=date(2024, 12, 15)).first_statement_month() == "2024-12"

    def test_installment_records(self):
        """Should create one row per installment, remainder on the last one."""
        rows = purchase(is_own_expense=False, borrower_name="Ana").to_installment_records("exp-1")

        assert [r.statement_month for r in rows] == ["2025-01", "2025-02", "2025-03"]
        assert [r.installment_amount for r in rows] == [
            Decimal("333.33"), Decimal("333.33"), Decimal("333.34"),
        ]
        assert all(r.expense_id == "exp-1" for r in rows)
        assert all(r.total_installments == 3 for r in rows)
        assert all(r.borrower_name == "Ana" and not r.is_own_expense for r in rows)
        assert not any(r.is_paid for r in rows)


# =============================================================================
# INSTALLMENT RECORD TESTS
# =============================================================================

class TestCardInstallmentRecord:
    """Tests for CardInstallmentRecord schema."""

    def test_month_row_with_day_normalized(self):
        """Should accept a stored 'YYYY-MM-DD' month and keep 'YYYY-MM'."""
        row = CardInstallmentRecord(
            card_name="Visa",
            installment_number=1,
            statement_month="2024-02-01",
            installment_amount=Decimal("10"),
        )

        assert row.statement_month == "2024-02"

    @pytest.mark.parametrize("month", ["2024-13", "24-01", "febrero"])
    def test_invalid_month_rejected(self, month):
        with pytest.raises(ValidationError):
            CardInstallmentRecord(
                card_name="Visa",
                installment_number=1,
                statement_month=month,
                installment_amount=Decimal("10"),
            )
