"""Tests for the pure bonus calculator."""
from decimal import Decimal

import pytest

from bonuses.calculator import BonusTiers, as_tiers, calculate_bonus, pick_bonus_percent
from bonuses.exceptions import InvalidInputError

TIERS = BonusTiers.of(3, 4, 5)


class TestCalculateBonus:
    def test_between_100_and_150_uses_100_tier(self):
        result = calculate_bonus(10_000_000, 12_000_000, TIERS)

        assert result.achievement_percent == Decimal("120.00")
        assert result.bonus_percent == Decimal("4")
        assert result.bonus_amount == Decimal("480000.00")

    def test_above_150_uses_top_tier(self):
        result = calculate_bonus(10_000_000, 16_000_000, TIERS)

        assert result.achievement_percent == Decimal("160.00")
        assert result.bonus_percent == Decimal("5")
        assert result.bonus_amount == Decimal("800000.00")

    def test_below_80_earns_nothing(self):
        result = calculate_bonus(10_000_000, 7_000_000, TIERS)

        assert result.achievement_percent == Decimal("70.00")
        assert result.bonus_percent == 0
        assert result.bonus_amount == 0

    def test_exact_80_threshold(self):
        result = calculate_bonus(10_000_000, 8_000_000, TIERS)

        assert result.bonus_percent == Decimal("3")
        assert result.bonus_amount == Decimal("240000.00")

    @pytest.mark.parametrize("actual", [0, 1, 5_000_000, 99_999_999])
    def test_zero_target_gives_zero(self, actual):
        result = calculate_bonus(0, actual, TIERS)

        assert result.achievement_percent == 0
        assert result.bonus_percent == 0
        assert result.bonus_amount == 0

    def test_achievement_is_rounded_half_up(self):
        # 2/3 = 66.666...% -> 66.67
        result = calculate_bonus(3, 2, TIERS)
        assert result.achievement_percent == Decimal("66.67")

        # 79.995% rounds to 80.00 and reaches the first tier
        result = calculate_bonus(200_000, 159_990, TIERS)
        assert result.achievement_percent == Decimal("80.00")
        assert result.bonus_percent == Decimal("3")

    def test_bonus_amount_has_money_precision(self):
        result = calculate_bonus(1000, Decimal("1234.567"), TIERS)

        assert result.bonus_amount == Decimal("49.38")
        assert result.bonus_amount.as_tuple().exponent == -2

    def test_accepts_strings_and_floats(self):
        result = calculate_bonus("10000000", 12_000_000.0, {"t80": "3", "t100": 4, "t150": 5.0})

        assert result.bonus_amount == Decimal("480000.00")

    @pytest.mark.parametrize(
        "target, actual, tiers",
        [
            (-1, 100, (3, 4, 5)),
            (100, -1, (3, 4, 5)),
            (100, 100, (3, -4, 5)),
        ],
    )
    def test_negative_inputs_raise(self, target, actual, tiers):
        with pytest.raises(InvalidInputError):
            calculate_bonus(target, actual, tiers)

    def test_garbage_input_raises(self):
        with pytest.raises(InvalidInputError):
            calculate_bonus("sepuluh juta", 100, TIERS)
        with pytest.raises(ValueError):
            calculate_bonus(100, float("nan"), TIERS)

    def test_tier_is_monotonic_in_income(self):
        target = Decimal("1000")
        previous = Decimal("-1")
        for actual in range(0, 2001, 25):
            percent = calculate_bonus(target, actual, TIERS).bonus_percent
            assert percent >= previous
            previous = percent


class TestTiers:
    def test_pick_from_highest_threshold(self):
        assert pick_bonus_percent(Decimal("150"), TIERS) == Decimal("5")
        assert pick_bonus_percent(Decimal("149.99"), TIERS) == Decimal("4")
        assert pick_bonus_percent(Decimal("100"), TIERS) == Decimal("4")
        assert pick_bonus_percent(Decimal("79.99"), TIERS) == 0

    def test_as_tiers_accepts_tuple(self):
        assert as_tiers((3, 4, 5)) == TIERS
