"""Merge target settings, period income and saved recap rows.

``reconcile`` is pure: it never talks to the database. It returns the
per-admin rows to display and the subset that has to be written back so the
saved recap matches the current inputs. ``status`` and ``paid_at`` are only
ever carried over from the saved row, never derived.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from bonuses.aggregator import period_bounds
from bonuses.calculator import ZERO, BonusTiers, calculate_bonus, to_decimal

STATUS_PENDING = "pending"
STATUS_PAID = "paid"

# Rates shown for admins without a target setting. Target is 0 for them, so
# the calculator awards no bonus regardless of these values.
FALLBACK_TIERS = BonusTiers(t80=Decimal("3"), t100=Decimal("4"), t150=Decimal("5"))

NUMERIC_FIELDS = (
    "target_revenue",
    "actual_income",
    "achievement_percent",
    "bonus_percent",
    "bonus_amount",
)


@dataclass(frozen=True)
class TargetSetting:
    admin_code: str
    target_revenue: Decimal = ZERO
    bonus_tier_80: Decimal = FALLBACK_TIERS.t80
    bonus_tier_100: Decimal = FALLBACK_TIERS.t100
    bonus_tier_150: Decimal = FALLBACK_TIERS.t150


@dataclass
class RecapRow:
    """One admin's recap for one month.

    ``recap_id``, ``is_saved`` and ``has_settings`` are view-only and are not
    part of what gets persisted.
    """

    admin_code: str
    month: int
    year: int
    target_revenue: Decimal = ZERO
    actual_income: Decimal = ZERO
    achievement_percent: Decimal = ZERO
    bonus_percent: Decimal = ZERO
    bonus_amount: Decimal = ZERO
    status: str = STATUS_PENDING
    paid_at: datetime | None = None
    recap_id: object = field(default=None, compare=False)
    is_saved: bool = field(default=False, compare=False)
    has_settings: bool = field(default=True, compare=False)

    def numeric_values(self) -> dict[str, Decimal]:
        return {name: getattr(self, name) for name in NUMERIC_FIELDS}

    def numbers_differ(self, other) -> bool:
        for name in NUMERIC_FIELDS:
            if to_decimal(getattr(other, name, ZERO), name) != getattr(self, name):
                return True
        return False


@dataclass
class ReconcileResult:
    rows: list[RecapRow]
    to_persist: list[RecapRow]


def _index_settings(settings: Iterable) -> dict[str, object]:
    if isinstance(settings, Mapping):
        return {str(code).strip(): s for code, s in settings.items()}
    return {str(s.admin_code).strip(): s for s in settings}


def _index_existing(existing_recap: Iterable, month: int, year: int) -> dict[str, object]:
    index = {}
    for row in existing_recap:
        if int(row.month) == month and int(row.year) == year:
            index[str(row.admin_code).strip()] = row
    return index


def reconcile(
    admin_codes: Iterable[str],
    settings: Iterable,
    income_by_admin: Mapping[str, Decimal],
    existing_recap: Iterable,
    month,
    year,
) -> ReconcileResult:
    """Compute the recap rows of ``month``/``year`` and the rows to write back."""
    start, _end = period_bounds(month, year)
    month, year = start.month, start.year

    settings_by_code = _index_settings(settings)
    existing_by_code = _index_existing(existing_recap, month, year)

    rows: list[RecapRow] = []
    to_persist: list[RecapRow] = []
    seen: set[str] = set()
    for raw_code in admin_codes:
        code = str(raw_code).strip()
        if not code or code in seen:
            continue
        seen.add(code)

        setting = settings_by_code.get(code)
        if setting is not None:
            target = to_decimal(setting.target_revenue, "target_revenue")
            tiers = BonusTiers.of(
                setting.bonus_tier_80, setting.bonus_tier_100, setting.bonus_tier_150
            )
        else:
            target = ZERO
            tiers = FALLBACK_TIERS
        actual = to_decimal(income_by_admin.get(code, ZERO), "actual_income")
        result = calculate_bonus(target, actual, tiers)

        existing = existing_by_code.get(code)
        row = RecapRow(
            admin_code=code,
            month=month,
            year=year,
            target_revenue=target,
            actual_income=actual,
            achievement_percent=result.achievement_percent,
            bonus_percent=result.bonus_percent,
            bonus_amount=result.bonus_amount,
            status=getattr(existing, "status", None) or STATUS_PENDING,
            paid_at=getattr(existing, "paid_at", None),
            recap_id=getattr(existing, "recap_id", None) or getattr(existing, "pk", None),
            is_saved=existing is not None,
            has_settings=setting is not None,
        )
        rows.append(row)
        if existing is None or row.numbers_differ(existing):
            to_persist.append(row)

    return ReconcileResult(rows=rows, to_persist=to_persist)


def summarize(rows: Iterable[RecapRow]) -> dict:
    """Totals shown above the recap table."""
    rows = list(rows)
    return {
        "admin_count": len(rows),
        "total_income": sum((r.actual_income for r in rows), ZERO),
        "total_bonus": sum((r.bonus_amount for r in rows), ZERO),
        "pending_count": sum(1 for r in rows if r.status == STATUS_PENDING),
        "paid_count": sum(1 for r in rows if r.status == STATUS_PAID),
        "unconfigured_count": sum(1 for r in rows if not r.has_settings),
    }


def only_codes(rows: Iterable[RecapRow], codes: Iterable[str] | None) -> list[RecapRow]:
    if codes is None:
        return list(rows)
    wanted = {str(c).strip() for c in codes}
    return [r for r in rows if r.admin_code in wanted]
