# backend/finance_tracker/services/summaries/apartment.py
"""
Shared apartment expense split.

    share%  = salary / total salaries × 100   (if any salary is loaded)
            = configured percentage           (otherwise)
    owes    = share% / 100 × total expenses
    paid    = sum of expenses the member paid
    balance = paid - owes
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from finance_tracker.services.summaries.types import ApartmentShare, ApartmentSummary
from finance_tracker.utils.money import HUNDRED, ZERO

if TYPE_CHECKING:
    from finance_tracker.schemas.apartment import (
        ApartmentExpense,
        ApartmentMember,
        ApartmentSalary,
    )


def apartment_shares(
        members: Iterable[ApartmentMember],
        salaries: Iterable[ApartmentSalary],
        expenses: Iterable[ApartmentExpense],
) -> ApartmentSummary:
    members = list(members)
    expenses = list(expenses)

    salary_by_person = {}
    for s in salaries:
        salary_by_person[s.person_name] = salary_by_person.get(s.person_name, ZERO) + s.salary

    total_salaries = sum((salary_by_person.get(m.person_name, ZERO) for m in members), ZERO)
    total_expenses = sum((e.amount for e in expenses), ZERO)
    salary_weighted = total_salaries > ZERO

    shares = []
    for member in members:
        salary = salary_by_person.get(member.person_name, ZERO)
        if salary_weighted:
            share = salary / total_salaries * HUNDRED
        else:
            share = member.percentage
        owes = share / HUNDRED * total_expenses
        paid = sum((e.amount for e in expenses if e.paid_by == member.person_name), ZERO)
        shares.append(ApartmentShare(
            person_name=member.person_name,
            salary=salary,
            share_percent=share,
            owes=owes,
            paid=paid,
            balance=paid - owes,
        ))

    return ApartmentSummary(
        total_expenses=total_expenses,
        total_salaries=total_salaries,
        salary_weighted=salary_weighted,
        shares=shares,
    )
