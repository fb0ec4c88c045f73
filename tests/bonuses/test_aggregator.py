"""Tests for per-admin period income aggregation."""
from datetime import date, datetime
from decimal import Decimal

import pytest

from bonuses.aggregator import IncomeRecord, aggregate_by_admin, known_admin_codes, period_bounds
from bonuses.exceptions import InvalidInputError, PeriodBoundaryError


class TestPeriodBounds:
    def test_leap_february(self):
        assert period_bounds(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_december(self):
        assert period_bounds(12, 2023) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_numeric_strings_are_accepted(self):
        assert period_bounds("3", "2024") == (date(2024, 3, 1), date(2024, 3, 31))

    @pytest.mark.parametrize(
        "month, year",
        [(0, 2024), (13, 2024), (3, 0), (3, 10000), ("maret", 2024), (None, 2024), (3.5, 2024)],
    )
    def test_invalid_period_raises(self, month, year):
        with pytest.raises(PeriodBoundaryError):
            period_bounds(month, year)


class TestAggregateByAdmin:
    def test_march_total_excludes_april(self):
        records = [
            IncomeRecord("A1", date(2024, 3, 2), Decimal("1000000")),
            IncomeRecord("A1", date(2024, 3, 15), Decimal("2500000")),
            IncomeRecord("A1", date(2024, 3, 31), Decimal("500000")),
            IncomeRecord("A1", date(2024, 4, 1), Decimal("9999999")),
        ]

        assert aggregate_by_admin(records, 3, 2024) == {"A1": Decimal("4000000")}

    def test_blank_codes_are_unattributed(self):
        records = [
            {"code": None, "date": date(2024, 3, 1), "amount": 100},
            {"code": "", "date": date(2024, 3, 1), "amount": 200},
            {"code": "   ", "date": date(2024, 3, 1), "amount": 300},
            {"code": " B2 ", "date": date(2024, 3, 1), "amount": 400},
        ]

        assert aggregate_by_admin(records, 3, 2024) == {"B2": Decimal("400")}

    def test_order_does_not_change_total(self):
        amounts = ["0.10", "0.20", "0.30", "1000000.05"]
        records = [IncomeRecord("A1", date(2024, 3, 5), Decimal(a)) for a in amounts]

        forward = aggregate_by_admin(records, 3, 2024)
        backward = aggregate_by_admin(list(reversed(records)), 3, 2024)

        assert forward == backward == {"A1": Decimal("1000000.65")}

    def test_datetime_and_iso_string_dates(self):
        records = [
            {"admin_code": "A1", "date": datetime(2024, 3, 31, 23, 59), "amount": "10"},
            {"admin_code": "A1", "date": "2024-03-01", "amount": "5"},
        ]

        assert aggregate_by_admin(records, 3, 2024) == {"A1": Decimal("15")}

    def test_negative_amount_raises(self):
        records = [IncomeRecord("A1", date(2024, 3, 2), Decimal("-1"))]

        with pytest.raises(InvalidInputError):
            aggregate_by_admin(records, 3, 2024)

    def test_malformed_date_string_raises(self):
        records = [{"admin_code": "A1", "date": "2024-31-03", "amount": "10"}]

        with pytest.raises(InvalidInputError):
            aggregate_by_admin(records, 3, 2024)

    def test_invalid_period_raises_before_reading(self):
        with pytest.raises(PeriodBoundaryError):
            aggregate_by_admin([], 13, 2024)


def test_known_admin_codes_spans_all_periods():
    records = [
        {"code": "B2", "date": date(2023, 1, 1), "amount": 1},
        {"code": "A1", "date": date(2024, 3, 1), "amount": 1},
        {"code": " A1", "date": date(2024, 4, 1), "amount": 1},
        {"code": None, "date": date(2024, 4, 1), "amount": 1},
    ]

    assert known_admin_codes(records) == ["A1", "B2"]
