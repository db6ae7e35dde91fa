# backend/tests/services/summaries/test_apartment_shares.py
"""
Tests for the shared apartment expense split.
"""

from decimal import Decimal

import pytest

from finance_tracker.schemas.apartment import ApartmentExpense, ApartmentMember, ApartmentSalary
from finance_tracker.services.summaries import apartment_shares


@pytest.fixture
def members() -> list[ApartmentMember]:
    return [
        ApartmentMember(person_name="Ana", percentage=Decimal("60")),
        ApartmentMember(person_name="Bruno", percentage=Decimal("40")),
    ]


@pytest.fixture
def expenses() -> list[ApartmentExpense]:
    return [
        ApartmentExpense(description="Alquiler", amount=Decimal("800"), paid_by="Ana"),
        ApartmentExpense(description="Expensas", amount=Decimal("200"), paid_by="Bruno"),
    ]


class TestApartmentShares:

    def test_configured_percentages_without_salaries(self, members, expenses):
        summary = apartment_shares(members, [], expenses)

        assert summary.salary_weighted is False
        assert summary.total_expenses == Decimal("1000")
        ana, bruno = summary.shares
        assert ana.share_percent == Decimal("60")
        assert ana.owes == Decimal("600")
        assert ana.paid == Decimal("800")
        assert ana.balance == Decimal("200")
        assert bruno.owes == Decimal("400")
        assert bruno.balance == Decimal("-200")

    def test_salary_weighted_split(self, members, expenses):
        salaries = [
            ApartmentSalary(person_name="Ana", salary=Decimal("300")),
            ApartmentSalary(person_name="Bruno", salary=Decimal("100")),
        ]

        summary = apartment_shares(members, salaries, expenses)

        assert summary.salary_weighted is True
        assert summary.total_salaries == Decimal("400")
        ana, bruno = summary.shares
        assert ana.share_percent == Decimal("75")
        assert ana.owes == Decimal("750")
        assert bruno.owes == Decimal("250")
        assert bruno.balance == Decimal("-50")

    def test_member_without_salary_owes_nothing_when_weighted(self, members, expenses):
        summary = apartment_shares(
            members, [ApartmentSalary(person_name="Ana", salary=Decimal("1"))], expenses
        )

        ana, bruno = summary.shares
        assert ana.owes == Decimal("1000")
        assert bruno.owes == Decimal("0")

    def test_balances_sum_to_zero(self, members, expenses):
        summary = apartment_shares(members, [], expenses)

        assert sum(s.balance for s in summary.shares) == Decimal("0")

    def test_no_expenses(self, members):
        summary = apartment_shares(members, [], [])

        assert all(s.owes == Decimal("0") and s.balance == Decimal("0") for s in summary.shares)
