"""Django admin for the admin bonus module."""
from django.conf import settings
from django.contrib import admin

from bonuses.models import AdminBonusRecap, AdminIncome, AdminTargetSetting


@admin.register(AdminTargetSetting)
class AdminTargetSettingAdmin(admin.ModelAdmin):
    list_display = ("admin_code", "target_display", "bonus_tier_80", "bonus_tier_100", "bonus_tier_150", "updated_at")
    search_fields = ("admin_code",)
    readonly_fields = ("created_at", "updated_at")

    def target_display(self, obj):
        return f"{settings.CURRENCY_SYMBOL} {obj.target_revenue:,.0f}"
    target_display.short_description = "Target omset"


@admin.register(AdminIncome)
class AdminIncomeAdmin(admin.ModelAdmin):
    list_display = ("date", "code", "amount", "note")
    list_filter = ("date",)
    search_fields = ("code", "note")
    date_hierarchy = "date"


@admin.register(AdminBonusRecap)
class AdminBonusRecapAdmin(admin.ModelAdmin):
    list_display = (
        "admin_code", "period", "actual_income", "achievement_percent",
        "bonus_percent", "bonus_amount", "status", "paid_at",
    )
    list_filter = ("status", "year", "month")
    search_fields = ("admin_code",)
    ordering = ("-year", "-month", "admin_code")
    # Numbers come from reconciliation, status from mark-as-paid.
    readonly_fields = (
        "admin_code", "month", "year", "target_revenue", "actual_income",
        "achievement_percent", "bonus_percent", "bonus_amount",
        "status", "paid_at", "paid_by", "created_at", "updated_at",
    )

    def has_add_permission(self, request):
        return False
