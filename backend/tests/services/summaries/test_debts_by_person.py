# backend/tests/services/summaries/test_debts_by_person.py
"""
Tests for debts grouped by person and settlement transactions.
"""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.schemas.credit_cards import CardInstallmentRecord, CreditCardPurchase
from finance_tracker.schemas.ledger import ManualDebtRecord
from finance_tracker.services.exceptions import ValidationError
from finance_tracker.services.platforms import Currency
from finance_tracker.services.summaries import (
    DebtSource,
    TransactionType,
    debts_by_person,
    settlement_transaction,
)


def card_debt(borrower: str | None, amount: str, paid: bool = False,
              currency: Currency = Currency.ARS, own: bool = False) -> CardInstallmentRecord:
    return CardInstallmentRecord(
        id=f"i-{borrower}-{amount}",
        card_name="Visa",
        description="Zapatillas",
        installment_number=1,
        total_installments=3,
        statement_month="2024-04",
        installment_amount=Decimal(amount),
        currency=currency,
        is_paid=paid,
        is_own_expense=own,
        borrower_name=borrower,
    )


def manual_debt(name: str, amount: str, paid: bool = False,
                currency: Currency = Currency.ARS) -> ManualDebtRecord:
    return ManualDebtRecord(
        id=f"m-{name}-{amount}",
        debtor_name=name,
        description="Préstamo",
        amount=Decimal(amount),
        currency=currency,
        is_paid=paid,
    )


class TestDebtsByPerson:

    def test_groups_installments_and_manual_debts(self):
        people = debts_by_person(
            [card_debt("Ana", "100"), card_debt("Ana", "40", paid=True)],
            [manual_debt("Ana", "25", currency=Currency.USD)],
        )

        assert len(people) == 1
        ana = people[0]
        assert ana.person_name == "Ana"
        assert ana.pending.ars == Decimal("100")
        assert ana.paid.ars == Decimal("40")
        assert ana.pending.usd == Decimal("25")
        assert [i.source for i in ana.items] == [
            DebtSource.CARD_INSTALLMENT,
            DebtSource.CARD_INSTALLMENT,
            DebtSource.MANUAL,
        ]
        assert ana.items[0].statement_month == "2024-04"
        assert ana.items[0].total_installments == 3

    def test_own_expenses_and_missing_borrower_skipped(self):
        people = debts_by_person(
            [card_debt(None, "100"), card_debt("Ana", "50", own=True)],
            [],
        )

        assert people == []

    def test_sorted_by_pending_desc(self):
        people = debts_by_person(
            [card_debt("Ana", "100"), card_debt("Bruno", "300")],
            [manual_debt("Caro", "200"), manual_debt("Dani", "5000", paid=True)],
        )

        assert [p.person_name for p in people] == ["Bruno", "Caro", "Ana", "Dani"]
        assert people[-1].has_pending is False

    def test_purchase_for_someone_else_becomes_debt(self):
        purchase = CreditCardPurchase(
            description="Celular",
            card_name="Visa",
            purchase_date=date(2024, 3, 20),
            closing_day=15,
            total_amount=Decimal("300"),
            installments=3,
            is_own_expense=False,
            borrower_name="  Ana ",
        )

        people = debts_by_person(purchase.to_installment_records(), [])

        assert people[0].person_name == "Ana"
        assert people[0].pending.ars == Decimal("300")
        assert [i.statement_month for i in people[0].items] == ["2024-04", "2024-05", "2024-06"]


class TestSettlementTransaction:

    def test_builds_income_entry(self):
        item = debts_by_person([], [manual_debt("Ana", "25", currency=Currency.USD)])[0].items[0]

        record = settlement_transaction("Ana", item, wallet_id="w-usd", on_date=date(2024, 5, 2))

        assert record.type == TransactionType.INCOME
        assert record.amount == Decimal("25")
        assert record.currency == Currency.USD
        assert record.wallet_id == "w-usd"
        assert record.date == date(2024, 5, 2)
        assert record.description == "Pago deuda: Ana - Préstamo"

    def test_already_paid_rejected(self):
        item = debts_by_person([], [manual_debt("Ana", "25", paid=True)])[0].items[0]

        with pytest.raises(ValidationError):
            settlement_transaction("Ana", item, wallet_id="w1")
