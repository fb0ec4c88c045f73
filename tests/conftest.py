from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import User
from bonuses.models import AdminBonusRecap, AdminIncome, AdminTargetSetting


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def super_admin_user(db):
    return User.objects.create_user(
        email="super@test.com",
        password="testpass123",
        first_name="Super",
        last_name="Admin",
        role=User.Role.SUPER_ADMIN,
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.com",
        password="testpass123",
        first_name="Admin",
        last_name="User",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def finance_user(db):
    return User.objects.create_user(
        email="finance@test.com",
        password="testpass123",
        first_name="Finance",
        last_name="User",
        role=User.Role.FINANCE_ADMIN,
    )


@pytest.fixture
def regular_user(db):
    return User.objects.create_user(
        email="user@test.com",
        password="testpass123",
        first_name="Regular",
        last_name="User",
        role=User.Role.USER,
    )


@pytest.fixture
def dispatched(monkeypatch):
    """Record recompute dispatches instead of queueing them."""
    import bonuses.tasks as bonus_tasks

    calls = []
    monkeypatch.setattr(
        bonus_tasks.recompute_admin_recap, "delay", lambda **kwargs: calls.append(kwargs)
    )
    return calls


@pytest.fixture
def target_a01(db):
    return AdminTargetSetting.objects.create(
        admin_code="A01",
        target_revenue=Decimal("10000000"),
        bonus_tier_80=Decimal("3"),
        bonus_tier_100=Decimal("4"),
        bonus_tier_150=Decimal("5"),
    )


@pytest.fixture
def march_income(db):
    """A01 earns 12,000,000 in March 2024, B02 1,500,000, plus unattributed income."""
    rows = [
        ("A01", date(2024, 3, 1), "7000000"),
        ("A01", date(2024, 3, 31), "5000000"),
        ("A01", date(2024, 4, 1), "9000000"),
        ("B02", date(2024, 3, 15), "1500000"),
        (None, date(2024, 3, 10), "800000"),
        ("", date(2024, 3, 11), "700000"),
    ]
    return [
        AdminIncome.objects.create(code=code, date=day, amount=Decimal(amount))
        for code, day, amount in rows
    ]


@pytest.fixture
def paid_recap(db):
    return AdminBonusRecap.objects.create(
        admin_code="A01",
        month=3,
        year=2024,
        target_revenue=Decimal("10000000.00"),
        actual_income=Decimal("11000000.00"),
        achievement_percent=Decimal("110.00"),
        bonus_percent=Decimal("4.00"),
        bonus_amount=Decimal("440000.00"),
        status=AdminBonusRecap.Status.PAID,
    )
