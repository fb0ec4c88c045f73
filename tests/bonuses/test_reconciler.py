"""Tests for the pure recap reconciliation."""
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from bonuses.exceptions import InvalidInputError, PeriodBoundaryError
from bonuses.reconciler import (
    STATUS_PAID,
    STATUS_PENDING,
    RecapRow,
    TargetSetting,
    only_codes,
    reconcile,
    summarize,
)

SETTINGS = [
    TargetSetting("A01", Decimal("10000000"), Decimal("3"), Decimal("4"), Decimal("5")),
    TargetSetting("B02", Decimal("2000000"), Decimal("2"), Decimal("3"), Decimal("4")),
]
INCOME = {"A01": Decimal("12000000"), "B02": Decimal("1500000")}


def _saved(rows):
    """What the database would hand back after persisting ``rows``."""
    return [
        RecapRow(
            admin_code=r.admin_code,
            month=r.month,
            year=r.year,
            status=r.status,
            paid_at=r.paid_at,
            recap_id=f"id-{r.admin_code}",
            **r.numeric_values(),
        )
        for r in rows
    ]


class TestReconcile:
    def test_first_run_persists_every_row(self):
        result = reconcile(["A01", "B02"], SETTINGS, INCOME, [], 3, 2024)

        assert [r.admin_code for r in result.rows] == ["A01", "B02"]
        assert result.to_persist == result.rows
        a01 = result.rows[0]
        assert a01.achievement_percent == Decimal("120.00")
        assert a01.bonus_amount == Decimal("480000.00")
        assert a01.status == STATUS_PENDING
        assert a01.is_saved is False
        # B02: 75% of target, below the first tier
        assert result.rows[1].bonus_amount == 0

    def test_second_run_is_idempotent(self):
        first = reconcile(["A01", "B02"], SETTINGS, INCOME, [], 3, 2024)
        second = reconcile(["A01", "B02"], SETTINGS, INCOME, _saved(first.to_persist), 3, 2024)

        assert second.to_persist == []
        assert all(r.is_saved for r in second.rows)
        assert second.rows[0].recap_id == "id-A01"

    def test_paid_status_survives_income_change(self):
        paid_at = datetime(2024, 4, 2, 9, 0, tzinfo=timezone.utc)
        first = reconcile(["A01"], SETTINGS, INCOME, [], 3, 2024)
        existing = _saved(first.rows)
        existing[0].status = STATUS_PAID
        existing[0].paid_at = paid_at

        result = reconcile(["A01"], SETTINGS, {"A01": Decimal("16000000")}, existing, 3, 2024)

        row = result.rows[0]
        assert result.to_persist == [row]
        assert row.achievement_percent == Decimal("160.00")
        assert row.bonus_amount == Decimal("800000.00")
        assert row.status == STATUS_PAID
        assert row.paid_at == paid_at

    def test_admin_without_settings(self):
        result = reconcile(["Z99"], SETTINGS, {"Z99": Decimal("5000000")}, [], 3, 2024)

        row = result.rows[0]
        assert row.has_settings is False
        assert row.target_revenue == 0
        assert row.actual_income == Decimal("5000000")
        assert row.bonus_amount == 0

    def test_admin_without_income_gets_zero_row(self):
        result = reconcile(["A01"], SETTINGS, {}, [], 3, 2024)

        assert result.rows[0].actual_income == 0
        assert result.rows[0].bonus_amount == 0

    def test_existing_rows_of_other_periods_are_ignored(self):
        first = reconcile(["A01"], SETTINGS, INCOME, [], 2, 2024)

        result = reconcile(["A01"], SETTINGS, INCOME, _saved(first.rows), 3, 2024)

        assert result.rows[0].is_saved is False
        assert len(result.to_persist) == 1

    def test_blank_and_duplicate_codes_are_skipped(self):
        result = reconcile(["A01", " ", "A01 ", ""], SETTINGS, INCOME, [], 3, 2024)

        assert [r.admin_code for r in result.rows] == ["A01"]

    def test_settings_may_be_a_mapping(self):
        by_code = {s.admin_code: s for s in SETTINGS}

        result = reconcile(["A01"], by_code, INCOME, [], 3, 2024)

        assert result.rows[0].bonus_percent == Decimal("4")

    def test_invalid_period(self):
        with pytest.raises(PeriodBoundaryError):
            reconcile(["A01"], SETTINGS, INCOME, [], 13, 2024)

    def test_negative_income_propagates(self):
        with pytest.raises(InvalidInputError):
            reconcile(["A01"], SETTINGS, {"A01": Decimal("-5")}, [], 3, 2024)


def test_summarize_totals():
    rows = reconcile(["A01", "B02", "Z99"], SETTINGS, INCOME, [], 3, 2024).rows
    rows[0].status = STATUS_PAID

    summary = summarize(rows)

    assert summary == {
        "admin_count": 3,
        "total_income": Decimal("13500000"),
        "total_bonus": Decimal("480000.00"),
        "pending_count": 2,
        "paid_count": 1,
        "unconfigured_count": 1,
    }


def test_only_codes():
    rows = reconcile(["A01", "B02"], SETTINGS, INCOME, [], 3, 2024).rows

    assert [r.admin_code for r in only_codes(rows, ["B02"])] == ["B02"]
    assert only_codes(rows, None) == rows
