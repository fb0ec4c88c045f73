"""Database side of the admin bonus recap.

Reads the inputs of a reconciliation pass and writes its results back. The
pure merge lives in ``bonuses.reconciler``; nothing here computes a bonus.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import DatabaseError, transaction
from django.utils import timezone

from bonuses.aggregator import aggregate_by_admin, known_admin_codes, period_bounds
from bonuses.calculator import to_decimal
from bonuses.exceptions import InvalidInputError, PersistenceBatchError
from bonuses.models import AdminBonusRecap, AdminIncome, AdminTargetSetting
from bonuses.reconciler import FALLBACK_TIERS, RecapRow, TargetSetting

logger = logging.getLogger("keuangan")


@dataclass
class RecapInputs:
    admin_codes: list[str] = field(default_factory=list)
    settings: list[TargetSetting] = field(default_factory=list)
    income_by_admin: dict[str, Decimal] = field(default_factory=dict)
    existing: list[RecapRow] = field(default_factory=list)


def _snapshot_setting(obj: AdminTargetSetting) -> TargetSetting:
    return TargetSetting(
        admin_code=obj.admin_code.strip(),
        target_revenue=obj.target_revenue,
        bonus_tier_80=obj.bonus_tier_80,
        bonus_tier_100=obj.bonus_tier_100,
        bonus_tier_150=obj.bonus_tier_150,
    )


def _snapshot_recap(obj: AdminBonusRecap) -> RecapRow:
    return RecapRow(
        admin_code=obj.admin_code,
        month=obj.month,
        year=obj.year,
        target_revenue=obj.target_revenue,
        actual_income=obj.actual_income,
        achievement_percent=obj.achievement_percent,
        bonus_percent=obj.bonus_percent,
        bonus_amount=obj.bonus_amount,
        status=obj.status,
        paid_at=obj.paid_at,
        recap_id=obj.pk,
        is_saved=True,
    )


def load_recap_inputs(month, year) -> RecapInputs:
    """Fetch everything a reconciliation pass of ``month``/``year`` needs.

    The admin universe is every non-blank income code across all periods plus
    the admins already saved for the period, so an admin with no income this
    month still gets a zero row. Database errors propagate.
    """
    start, end = period_bounds(month, year)

    existing = [
        _snapshot_recap(r)
        for r in AdminBonusRecap.objects.filter(month=start.month, year=start.year)
    ]
    income_codes = (
        {"code": c}
        for c in AdminIncome.objects.exclude(code__isnull=True).order_by()
        .values_list("code", flat=True)
        .distinct()
    )
    # Saved rows stay in the universe so recoded or deleted income drops them to zero.
    codes = known_admin_codes([*income_codes, *existing])
    settings = [_snapshot_setting(s) for s in AdminTargetSetting.objects.all()]
    period_income = AdminIncome.objects.filter(date__range=(start, end)).values(
        "code", "date", "amount"
    )
    income_by_admin = aggregate_by_admin(period_income, start.month, start.year)
    return RecapInputs(
        admin_codes=codes,
        settings=settings,
        income_by_admin=income_by_admin,
        existing=existing,
    )


def upsert_recap_rows(rows) -> list[str]:
    """Write the numeric fields of ``rows``, one savepoint per admin.

    ``status`` and ``paid_at`` are never part of the write, so a paid recap
    stays paid when its numbers change. Every row is attempted; if any of them
    fails a ``PersistenceBatchError`` is raised at the end listing the failed
    codes. Returns the persisted admin codes otherwise.
    """
    persisted: list[str] = []
    errors: dict[str, str] = {}
    for row in rows:
        try:
            with transaction.atomic():
                AdminBonusRecap.objects.update_or_create(
                    admin_code=row.admin_code,
                    month=row.month,
                    year=row.year,
                    defaults=row.numeric_values(),
                )
        except DatabaseError as exc:
            logger.warning(
                "Upsert rekap gagal admin=%s periode=%s-%02d: %s",
                row.admin_code, row.year, row.month, exc,
            )
            errors[row.admin_code] = str(exc)
            continue
        persisted.append(row.admin_code)

    if errors:
        raise PersistenceBatchError(list(errors), persisted_codes=persisted, errors=errors)
    return persisted


def mark_recap_paid(recap_id, paid_by=None, paid_at=None) -> AdminBonusRecap:
    """Move one saved recap from ``pending`` to ``paid``.

    Raises
    ------
    AdminBonusRecap.DoesNotExist
        If no recap has this id.
    ValueError
        If the recap is already paid.
    """
    paid_at = paid_at or timezone.now()
    updated = AdminBonusRecap.objects.filter(
        pk=recap_id, status=AdminBonusRecap.Status.PENDING
    ).update(
        status=AdminBonusRecap.Status.PAID,
        paid_at=paid_at,
        paid_by=paid_by,
        updated_at=timezone.now(),
    )
    recap = AdminBonusRecap.objects.get(pk=recap_id)
    if not updated:
        raise ValueError(f"Bonus {recap.admin_code} periode {recap.period} sudah dibayar.")
    logger.info(
        "Bonus admin=%s periode=%s ditandai dibayar oleh %s",
        recap.admin_code, recap.period, paid_by,
    )
    return recap


def save_target_setting(
    admin_code: str,
    target_revenue,
    t80=None,
    t100=None,
    t150=None,
) -> AdminTargetSetting:
    """Create or replace the target setting of ``admin_code``.

    Missing tier rates fall back to 3/4/5.
    """
    code = (admin_code or "").strip()
    if not code:
        raise InvalidInputError("Kode admin wajib diisi.")
    values = {
        "target_revenue": to_decimal(target_revenue, "target_revenue"),
        "bonus_tier_80": to_decimal(FALLBACK_TIERS.t80 if t80 is None else t80, "bonus_tier_80"),
        "bonus_tier_100": to_decimal(FALLBACK_TIERS.t100 if t100 is None else t100, "bonus_tier_100"),
        "bonus_tier_150": to_decimal(FALLBACK_TIERS.t150 if t150 is None else t150, "bonus_tier_150"),
    }
    for name in ("bonus_tier_80", "bonus_tier_100", "bonus_tier_150"):
        if values[name] > Decimal("100"):
            raise InvalidInputError(f"{name} tidak boleh lebih dari 100%.")

    setting, created = AdminTargetSetting.objects.update_or_create(
        admin_code=code, defaults=values
    )
    logger.info(
        "Setting target admin=%s %s (target=%s)",
        code, "dibuat" if created else "diperbarui", setting.target_revenue,
    )
    return setting
