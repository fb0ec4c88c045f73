import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _percent(verbose_name, default):
    return models.DecimalField(
        decimal_places=2,
        default=Decimal(default),
        max_digits=5,
        validators=[
            django.core.validators.MinValueValidator(Decimal("0")),
            django.core.validators.MaxValueValidator(Decimal("100")),
        ],
        verbose_name=verbose_name,
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AdminTargetSetting",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="dibuat pada")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="diperbarui pada")),
                ("admin_code", models.CharField(max_length=30, unique=True, verbose_name="kode admin")),
                (
                    "target_revenue",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="target omset",
                    ),
                ),
                ("bonus_tier_80", _percent("bonus capaian 80% (%)", "3")),
                ("bonus_tier_100", _percent("bonus capaian 100% (%)", "4")),
                ("bonus_tier_150", _percent("bonus capaian 150% (%)", "5")),
            ],
            options={
                "verbose_name": "setting target admin",
                "verbose_name_plural": "setting target admin",
                "ordering": ["admin_code"],
            },
        ),
        migrations.CreateModel(
            name="AdminIncome",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="dibuat pada")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="diperbarui pada")),
                (
                    "code",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Kosong untuk pendapatan yang belum diatribusikan.",
                        max_length=30,
                        null=True,
                        verbose_name="kode admin",
                    ),
                ),
                ("date", models.DateField(db_index=True, verbose_name="tanggal")),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="nominal",
                    ),
                ),
                ("note", models.CharField(blank=True, default="", max_length=255, verbose_name="keterangan")),
            ],
            options={
                "verbose_name": "pendapatan admin",
                "verbose_name_plural": "pendapatan admin",
                "ordering": ["-date", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="AdminBonusRecap",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="dibuat pada")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="diperbarui pada")),
                ("admin_code", models.CharField(max_length=30, verbose_name="kode admin")),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ],
                        verbose_name="bulan",
                    ),
                ),
                ("year", models.PositiveSmallIntegerField(verbose_name="tahun")),
                ("target_revenue", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=16, verbose_name="target omset")),
                ("actual_income", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=16, verbose_name="pendapatan aktual")),
                ("achievement_percent", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14, verbose_name="persen pencapaian")),
                ("bonus_percent", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5, verbose_name="persen bonus")),
                ("bonus_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=16, verbose_name="jumlah bonus")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Belum dibayar"), ("paid", "Sudah dibayar")],
                        db_index=True,
                        default="pending",
                        max_length=10,
                        verbose_name="status",
                    ),
                ),
                ("paid_at", models.DateTimeField(blank=True, null=True, verbose_name="dibayar pada")),
                (
                    "paid_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="admin_bonus_payments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "rekap bonus admin",
                "verbose_name_plural": "rekap bonus admin",
                "ordering": ["-year", "-month", "admin_code"],
                "indexes": [models.Index(fields=["year", "month"], name="bonus_recap_period_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("admin_code", "month", "year"),
                        name="uniq_admin_bonus_recap_period",
                    )
                ],
            },
        ),
    ]
