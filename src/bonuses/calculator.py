"""Pure bonus calculation for admin monthly targets.

Achievement is ``actual / target * 100`` rounded half-up to two decimals.
The bonus rate is picked from three tiers, evaluated from the highest
threshold down, and applied to the actual income (not to the target).
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from bonuses.exceptions import InvalidInputError

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

# (threshold %, tier attribute), highest first.
TIER_THRESHOLDS = (
    (Decimal("150"), "t150"),
    (Decimal("100"), "t100"),
    (Decimal("80"), "t80"),
)


@dataclass(frozen=True)
class BonusTiers:
    """Bonus rates (percent) for the 80%, 100% and 150% achievement tiers."""

    t80: Decimal
    t100: Decimal
    t150: Decimal

    @classmethod
    def of(cls, t80, t100, t150) -> "BonusTiers":
        return cls(
            t80=to_decimal(t80, "bonus_tier_80"),
            t100=to_decimal(t100, "bonus_tier_100"),
            t150=to_decimal(t150, "bonus_tier_150"),
        )


@dataclass(frozen=True)
class BonusResult:
    achievement_percent: Decimal
    bonus_percent: Decimal
    bonus_amount: Decimal


def to_decimal(value, field: str = "value") -> Decimal:
    """Coerce ``value`` to Decimal, rejecting negatives and garbage."""
    if value is None:
        return ZERO
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInputError(f"{field} bukan angka yang valid: {value!r}")
    if not result.is_finite():
        raise InvalidInputError(f"{field} bukan angka yang valid: {value!r}")
    if result < ZERO:
        raise InvalidInputError(f"{field} tidak boleh negatif: {value}")
    return result


def as_tiers(tiers) -> BonusTiers:
    """Accept a BonusTiers, a ``{"t80", "t100", "t150"}`` mapping or a 3-tuple."""
    if isinstance(tiers, BonusTiers):
        return BonusTiers.of(tiers.t80, tiers.t100, tiers.t150)
    if isinstance(tiers, Mapping):
        return BonusTiers.of(tiers["t80"], tiers["t100"], tiers["t150"])
    t80, t100, t150 = tiers
    return BonusTiers.of(t80, t100, t150)


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def pick_bonus_percent(achievement_percent: Decimal, tiers: BonusTiers) -> Decimal:
    for threshold, attr in TIER_THRESHOLDS:
        if achievement_percent >= threshold:
            return getattr(tiers, attr)
    return ZERO


def calculate_bonus(target_revenue, actual_income, tiers: BonusTiers) -> BonusResult:
    """Return achievement %, bonus % and bonus amount for one admin/period."""
    target = to_decimal(target_revenue, "target_revenue")
    actual = to_decimal(actual_income, "actual_income")
    tiers = as_tiers(tiers)

    if target == ZERO:
        return BonusResult(ZERO, ZERO, ZERO)

    achievement = round2(actual / target * HUNDRED)
    bonus_percent = pick_bonus_percent(achievement, tiers)
    bonus_amount = round2(actual * bonus_percent / HUNDRED)
    return BonusResult(
        achievement_percent=achievement,
        bonus_percent=bonus_percent,
        bonus_amount=bonus_amount,
    )
