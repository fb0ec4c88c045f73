"""DRF Serializers for the admin bonus module."""
from __future__ import annotations

from rest_framework import serializers

from bonuses.aggregator import period_bounds
from bonuses.exceptions import PeriodBoundaryError
from bonuses.models import AdminBonusRecap, AdminIncome, AdminTargetSetting


# ────────────────────────────────────────────────────────────
# Target settings & income
# ────────────────────────────────────────────────────────────

class AdminTargetSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminTargetSetting
        fields = [
            "id", "admin_code", "target_revenue",
            "bonus_tier_80", "bonus_tier_100", "bonus_tier_150",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        # POST is an upsert on admin_code, uniqueness is checked in validate().
        extra_kwargs = {"admin_code": {"validators": []}}

    def validate_admin_code(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Kode admin wajib diisi.")
        return value

    def validate(self, attrs):
        code = attrs.get("admin_code")
        if self.instance is not None and code and code != self.instance.admin_code:
            if AdminTargetSetting.objects.filter(admin_code=code).exclude(pk=self.instance.pk).exists():
                raise serializers.ValidationError(
                    {"admin_code": "Setting untuk kode admin ini sudah ada."}
                )
        return attrs


class AdminIncomeSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminIncome
        fields = ["id", "code", "date", "amount", "note", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_code(self, value):
        value = (value or "").strip()
        return value or None


# ────────────────────────────────────────────────────────────
# Recap
# ────────────────────────────────────────────────────────────

class AdminBonusRecapSerializer(serializers.ModelSerializer):
    status_label = serializers.CharField(source="get_status_display", read_only=True)
    paid_by_name = serializers.SerializerMethodField()

    class Meta:
        model = AdminBonusRecap
        fields = [
            "id", "admin_code", "month", "year",
            "target_revenue", "actual_income", "achievement_percent",
            "bonus_percent", "bonus_amount",
            "status", "status_label", "paid_at", "paid_by", "paid_by_name",
            "updated_at",
        ]
        read_only_fields = fields

    def get_paid_by_name(self, obj) -> str:
        if not obj.paid_by:
            return ""
        return obj.paid_by.get_full_name() or obj.paid_by.email


class RecapRowSerializer(serializers.Serializer):
    """Computed recap row, saved or not yet saved."""

    recap_id = serializers.UUIDField(allow_null=True)
    admin_code = serializers.CharField()
    month = serializers.IntegerField()
    year = serializers.IntegerField()
    target_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    actual_income = serializers.DecimalField(max_digits=16, decimal_places=2)
    achievement_percent = serializers.DecimalField(max_digits=20, decimal_places=2)
    bonus_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    bonus_amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    status = serializers.CharField()
    status_label = serializers.SerializerMethodField()
    paid_at = serializers.DateTimeField(allow_null=True)
    is_saved = serializers.BooleanField()
    has_settings = serializers.BooleanField()

    def get_status_label(self, row) -> str:
        return AdminBonusRecap.Status(row.status).label


class RecapSummarySerializer(serializers.Serializer):
    admin_count = serializers.IntegerField()
    total_income = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_bonus = serializers.DecimalField(max_digits=20, decimal_places=2)
    pending_count = serializers.IntegerField()
    paid_count = serializers.IntegerField()
    unconfigured_count = serializers.IntegerField()


class RecapPeriodSerializer(serializers.Serializer):
    month = serializers.IntegerField()
    year = serializers.IntegerField()

    def validate(self, attrs):
        try:
            period_bounds(attrs["month"], attrs["year"])
        except PeriodBoundaryError as exc:
            raise serializers.ValidationError({"detail": str(exc)})
        return attrs


class RecapSaveSerializer(RecapPeriodSerializer):
    admin_codes = serializers.ListField(
        child=serializers.CharField(), required=False, allow_empty=False
    )

    def validate_admin_codes(self, value):
        codes = [c.strip() for c in value if c and c.strip()]
        if not codes:
            raise serializers.ValidationError("Minimal satu kode admin.")
        return codes


class MarkPaidSerializer(serializers.Serializer):
    paid_at = serializers.DateTimeField(required=False)
