"""Models for admin targets, admin income and the monthly bonus recap."""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimeStampedModel


def _percent_field(verbose_name: str, default: str):
    return models.DecimalField(
        verbose_name,
        max_digits=5,
        decimal_places=2,
        default=Decimal(default),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )


class AdminTargetSetting(TimeStampedModel):
    """Permanent monthly revenue target and bonus rates for one admin code.

    Not versioned: editing a setting changes every recap recomputed afterwards.
    """

    admin_code = models.CharField("kode admin", max_length=30, unique=True)
    target_revenue = models.DecimalField(
        "target omset",
        max_digits=16,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    bonus_tier_80 = _percent_field("bonus capaian 80% (%)", "3")
    bonus_tier_100 = _percent_field("bonus capaian 100% (%)", "4")
    bonus_tier_150 = _percent_field("bonus capaian 150% (%)", "5")

    class Meta:
        verbose_name = "setting target admin"
        verbose_name_plural = "setting target admin"
        ordering = ["admin_code"]

    def __str__(self) -> str:
        return f"{self.admin_code} (target {self.target_revenue})"

    def clean(self) -> None:
        self.admin_code = (self.admin_code or "").strip()
        if not self.admin_code:
            raise ValidationError({"admin_code": "Kode admin wajib diisi."})


class AdminIncome(TimeStampedModel):
    """One income transaction attributed (or not) to an admin code."""

    code = models.CharField(
        "kode admin",
        max_length=30,
        null=True,
        blank=True,
        db_index=True,
        help_text="Kosong untuk pendapatan yang belum diatribusikan.",
    )
    date = models.DateField("tanggal", db_index=True)
    amount = models.DecimalField(
        "nominal",
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    note = models.CharField("keterangan", max_length=255, blank=True, default="")

    class Meta:
        verbose_name = "pendapatan admin"
        verbose_name_plural = "pendapatan admin"
        ordering = ["-date", "-created_at"]

    def __str__(self) -> str:
        return f"{self.code or '-'} {self.date} {self.amount}"


class AdminBonusRecap(TimeStampedModel):
    """Saved bonus recap for one admin and one month.

    Numeric fields are rewritten by every reconciliation; ``status`` and
    ``paid_at`` only change through the mark-as-paid action.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "Belum dibayar"
        PAID = "paid", "Sudah dibayar"

    admin_code = models.CharField("kode admin", max_length=30)
    month = models.PositiveSmallIntegerField(
        "bulan",
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )
    year = models.PositiveSmallIntegerField("tahun")

    target_revenue = models.DecimalField(
        "target omset", max_digits=16, decimal_places=2, default=Decimal("0")
    )
    actual_income = models.DecimalField(
        "pendapatan aktual", max_digits=16, decimal_places=2, default=Decimal("0")
    )
    achievement_percent = models.DecimalField(
        "persen pencapaian", max_digits=20, decimal_places=2, default=Decimal("0")
    )
    bonus_percent = models.DecimalField(
        "persen bonus", max_digits=5, decimal_places=2, default=Decimal("0")
    )
    bonus_amount = models.DecimalField(
        "jumlah bonus", max_digits=16, decimal_places=2, default=Decimal("0")
    )

    status = models.CharField(
        "status",
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    paid_at = models.DateTimeField("dibayar pada", null=True, blank=True)
    paid_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="admin_bonus_payments",
    )

    class Meta:
        verbose_name = "rekap bonus admin"
        verbose_name_plural = "rekap bonus admin"
        ordering = ["-year", "-month", "admin_code"]
        constraints = [
            models.UniqueConstraint(
                fields=["admin_code", "month", "year"],
                name="uniq_admin_bonus_recap_period",
            ),
        ]
        indexes = [
            models.Index(fields=["year", "month"], name="bonus_recap_period_idx"),
        ]

    @property
    def period(self) -> str:
        return f"{self.year}-{self.month:02d}"

    def __str__(self) -> str:
        return f"{self.admin_code} {self.period} ({self.get_status_display()})"
