"""Per-admin income totals for a calendar month."""
from __future__ import annotations

import calendar
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from bonuses.calculator import ZERO, to_decimal
from bonuses.exceptions import InvalidInputError, PeriodBoundaryError


@dataclass(frozen=True)
class IncomeRecord:
    admin_code: str | None
    date: date
    amount: Decimal


def period_bounds(month, year) -> tuple[date, date]:
    """Return the first and last day (inclusive) of ``month``/``year``."""
    try:
        month_i = int(month)
        year_i = int(year)
    except (TypeError, ValueError):
        raise PeriodBoundaryError(f"Periode tidak valid: bulan={month!r} tahun={year!r}")
    if (isinstance(month, float) and month != month_i) or (isinstance(year, float) and year != year_i):
        raise PeriodBoundaryError(f"Periode tidak valid: bulan={month!r} tahun={year!r}")
    if not 1 <= month_i <= 12:
        raise PeriodBoundaryError(f"Bulan harus 1-12, diterima {month!r}.")
    if not 1 <= year_i <= 9999:
        raise PeriodBoundaryError(f"Tahun tidak valid: {year!r}.")
    last_day = calendar.monthrange(year_i, month_i)[1]
    return date(year_i, month_i, 1), date(year_i, month_i, last_day)


def _field(record, *names):
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _normalize_code(code) -> str:
    if code is None:
        return ""
    return str(code).strip()


def _as_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise InvalidInputError(f"date bukan tanggal yang valid: {value!r}") from None


def aggregate_by_admin(records: Iterable, month, year) -> dict[str, Decimal]:
    """Sum income amounts per admin code for the given month.

    Records without an admin code are unattributed income and never count
    towards any admin. Amounts are summed as Decimal so the result does not
    depend on record order.
    """
    start, end = period_bounds(month, year)
    totals: dict[str, Decimal] = {}
    for record in records:
        code = _normalize_code(_field(record, "admin_code", "code"))
        if not code:
            continue
        record_date = _as_date(_field(record, "date", "tanggal"))
        if record_date is None or not start <= record_date <= end:
            continue
        amount = to_decimal(_field(record, "amount", "nominal"), "amount")
        totals[code] = totals.get(code, ZERO) + amount
    return totals


def known_admin_codes(records: Iterable) -> list[str]:
    """Every non-blank admin code seen in ``records``, any period, sorted."""
    codes = {_normalize_code(_field(r, "admin_code", "code")) for r in records}
    codes.discard("")
    return sorted(codes)
