# backend/tests/services/summaries/test_statement_totals.py
"""
Tests for credit card statement totals.
"""

from datetime import date
from decimal import Decimal

from finance_tracker.schemas.credit_cards import CardInstallmentRecord, CreditCardPurchase
from finance_tracker.services.platforms import Currency
from finance_tracker.services.summaries import statement_totals


def installment(card: str, month: str, amount: str, currency: Currency = Currency.ARS,
                paid: bool = False) -> CardInstallmentRecord:
    return CardInstallmentRecord(
        card_name=card,
        installment_number=1,
        statement_month=month,
        installment_amount=Decimal(amount),
        currency=currency,
        is_paid=paid,
    )


class TestStatementTotals:

    def test_groups_by_card_and_currency(self):
        installments = [
            installment("Visa", "2024-04", "100"),
            installment("Visa", "2024-04", "50", paid=True),
            installment("Visa", "2024-04", "20", currency=Currency.USD),
            installment("Amex", "2024-04", "70"),
            installment("Visa", "2024-05", "999"),
        ]

        totals = statement_totals(installments, "2024-04")

        assert [(t.card_name, t.currency, t.total) for t in totals] == [
            ("Amex", Currency.ARS, Decimal("70")),
            ("Visa", Currency.ARS, Decimal("150")),
            ("Visa", Currency.USD, Decimal("20")),
        ]
        visa_ars = totals[1]
        assert visa_ars.paid == Decimal("50")
        assert visa_ars.pending == Decimal("100")
        assert visa_ars.installment_count == 2

    def test_empty_month(self):
        assert statement_totals([installment("Visa", "2024-04", "1")], "2024-06") == []

    def test_purchase_schedule_lands_in_expected_statements(self):
        purchase = CreditCardPurchase(
            description="Heladera",
            card_name="Visa",
            purchase_date=date(2024, 12, 20),
            closing_day=15,
            total_amount=Decimal("100"),
            installments=3,
        )
        rows = purchase.to_installment_records(expense_id="e1")

        january = statement_totals(rows, "2025-01")
        march = statement_totals(rows, "2025-03")

        assert january[0].total == Decimal("33.33")
        assert march[0].total == Decimal("33.34")
