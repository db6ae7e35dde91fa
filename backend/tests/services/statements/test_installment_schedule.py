# backend/tests/services/statements/test_installment_schedule.py
"""
Tests for installment schedule materialization.
"""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.services.exceptions import ValidationError
from finance_tracker.services.statements import build_installment_schedule, split_amount


class TestSplitAmount:
    """Tests for splitting a total into installment amounts."""

    def test_even_split(self):
        assert split_amount(Decimal("300"), 3) == [Decimal("100.00")] * 3

    def test_last_installment_absorbs_remainder(self):
        parts = split_amount(Decimal("100"), 3)

        assert parts == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]

    def test_parts_always_sum_to_total(self):
        for total, count in [("1000", 7), ("0.05", 3), ("99999.99", 12), ("10", 6)]:
            parts = split_amount(Decimal(total), count)
            assert sum(parts) == Decimal(total)
            assert len(parts) == count

    def test_rounding_up_makes_last_smaller(self):
        parts = split_amount(Decimal("200"), 3)

        assert parts == [Decimal("66.67"), Decimal("66.67"), Decimal("66.66")]

    def test_single_installment_is_total(self):
        assert split_amount(Decimal("123.45"), 1) == [Decimal("123.45")]

    def test_zero_installments_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            split_amount(Decimal("100"), 0)

        assert exc_info.value.field == "installment_count"


class TestBuildSchedule:
    """Tests for full schedule rows."""

    def test_rows_are_numbered_and_monthly(self):
        plans = build_installment_schedule(Decimal("100"), 3, date(2024, 12, 20), 15)

        assert [p.installment_number for p in plans] == [1, 2, 3]
        assert [p.statement_month for p in plans] == ["2025-01", "2025-02", "2025-03"]
        assert [p.amount for p in plans] == [
            Decimal("33.33"), Decimal("33.33"), Decimal("33.34"),
        ]

    def test_rows_start_unpaid(self):
        plans = build_installment_schedule(Decimal("50"), 2, "2024-03-10", 15)

        assert not any(p.is_paid for p in plans)
        assert plans[0].statement_month == "2024-03"
