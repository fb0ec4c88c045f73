"""API views for the admin bonus module."""
from __future__ import annotations

import logging

import django_filters
from django.conf import settings
from django.db import DatabaseError
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.pagination import StandardResultsSetPagination
from api.v1.permissions import CanManagePayroll, CanManagePayrollOrReadOnly, IsFinanceStaff
from bonuses.bonus_serializers import (
    AdminBonusRecapSerializer,
    AdminIncomeSerializer,
    AdminTargetSettingSerializer,
    MarkPaidSerializer,
    RecapPeriodSerializer,
    RecapRowSerializer,
    RecapSaveSerializer,
    RecapSummarySerializer,
)
from bonuses.exceptions import PersistenceBatchError
from bonuses.models import AdminBonusRecap, AdminIncome, AdminTargetSetting
from bonuses.persistence import mark_recap_paid, save_target_setting
from bonuses.reconciler import summarize
from bonuses.services import build_admin_recap, save_admin_recap
from core.export import rows_to_csv_response, rows_to_xlsx_response

logger = logging.getLogger("keuangan")

DB_UNAVAILABLE = "Database tidak dapat diakses, coba lagi nanti."


def _period_from(data) -> tuple[int, int]:
    serializer = RecapPeriodSerializer(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data["month"], serializer.validated_data["year"]


def _unavailable(exc) -> Response:
    logger.error("Rekap bonus: database tidak tersedia: %s", exc, exc_info=True)
    return Response({"detail": DB_UNAVAILABLE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


# ────────────────────────────────────────────────────────────
# Target settings
# ────────────────────────────────────────────────────────────

class AdminTargetSettingViewSet(viewsets.ModelViewSet):
    """CRUD for admin targets. POST replaces the setting of an existing code."""

    serializer_class = AdminTargetSettingSerializer
    queryset = AdminTargetSetting.objects.all()
    permission_classes = [IsAuthenticated, CanManagePayrollOrReadOnly]
    search_fields = ["admin_code"]
    ordering_fields = ["admin_code", "target_revenue", "updated_at"]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        existed = AdminTargetSetting.objects.filter(admin_code=data["admin_code"]).exists()
        try:
            setting = save_target_setting(
                admin_code=data["admin_code"],
                target_revenue=data.get("target_revenue"),
                t80=data.get("bonus_tier_80"),
                t100=data.get("bonus_tier_100"),
                t150=data.get("bonus_tier_150"),
            )
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)})
        code = status.HTTP_200_OK if existed else status.HTTP_201_CREATED
        return Response(self.get_serializer(setting).data, status=code)


# ────────────────────────────────────────────────────────────
# Admin income
# ────────────────────────────────────────────────────────────

class AdminIncomeFilter(django_filters.FilterSet):
    month = django_filters.NumberFilter(field_name="date", lookup_expr="month")
    year = django_filters.NumberFilter(field_name="date", lookup_expr="year")
    code = django_filters.CharFilter(field_name="code", lookup_expr="exact")
    unassigned = django_filters.BooleanFilter(field_name="code", lookup_expr="isnull")

    class Meta:
        model = AdminIncome
        fields = ["month", "year", "code", "unassigned"]


class AdminIncomeViewSet(viewsets.ModelViewSet):
    """Raw income records feeding the recap."""

    serializer_class = AdminIncomeSerializer
    queryset = AdminIncome.objects.all()
    permission_classes = [IsAuthenticated, IsFinanceStaff]
    filterset_class = AdminIncomeFilter
    search_fields = ["code", "note"]
    ordering_fields = ["date", "amount", "code", "created_at"]
    pagination_class = StandardResultsSetPagination


# ────────────────────────────────────────────────────────────
# Recap
# ────────────────────────────────────────────────────────────

class AdminRecapView(APIView):
    """
    GET  /api/v1/admin-recap/?month=3&year=2024
        Computed recap rows of the period plus totals. Nothing is written.
    POST /api/v1/admin-recap/  {month, year, admin_codes?}
        Reconcile and save the rows whose numbers changed.
    """

    permission_classes = [IsAuthenticated, IsFinanceStaff]

    def get(self, request):
        month, year = _period_from(request.query_params)
        try:
            result = build_admin_recap(month, year)
        except DatabaseError as exc:
            return _unavailable(exc)
        return Response({
            "month": month,
            "year": year,
            "currency": settings.CURRENCY,
            "rows": RecapRowSerializer(result.rows, many=True).data,
            "summary": RecapSummarySerializer(summarize(result.rows)).data,
            "pending_sync": len(result.to_persist),
        })

    def post(self, request):
        serializer = RecapSaveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        month = serializer.validated_data["month"]
        year = serializer.validated_data["year"]
        admin_codes = serializer.validated_data.get("admin_codes")

        try:
            saved = save_admin_recap(month, year, admin_codes=admin_codes)
        except PersistenceBatchError as exc:
            return Response(
                {
                    "detail": str(exc),
                    "failed_codes": exc.failed_codes,
                    "persisted_codes": exc.persisted_codes,
                },
                status=status.HTTP_207_MULTI_STATUS,
            )
        except DatabaseError as exc:
            return _unavailable(exc)
        return Response({
            "month": month,
            "year": year,
            "persisted_codes": saved.persisted_codes,
            "skipped_count": saved.skipped_count,
        })


class AdminRecapMarkPaidView(APIView):
    """POST /api/v1/admin-recap/<id>/mark-paid/"""

    permission_classes = [IsAuthenticated, CanManagePayroll]

    def post(self, request, recap_id):
        serializer = MarkPaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            recap = mark_recap_paid(
                recap_id,
                paid_by=request.user,
                paid_at=serializer.validated_data.get("paid_at"),
            )
        except AdminBonusRecap.DoesNotExist:
            raise NotFound("Rekap bonus tidak ditemukan.")
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)})
        return Response(AdminBonusRecapSerializer(recap).data)


EXPORT_COLUMNS = [
    ("admin_code", "Kode Admin"),
    ("target_revenue", "Target Omset"),
    ("actual_income", "Pendapatan"),
    ("achievement_percent", "Pencapaian (%)"),
    ("bonus_percent", "Bonus (%)"),
    ("bonus_amount", "Jumlah Bonus"),
    (lambda r: AdminBonusRecap.Status(r.status).label, "Status"),
    (lambda r: r.paid_at.strftime("%d/%m/%Y %H:%M") if r.paid_at else "", "Dibayar Pada"),
]


class AdminRecapExportView(APIView):
    """GET /api/v1/admin-recap/export/?month=&year=&format=xlsx|csv"""

    permission_classes = [IsAuthenticated, IsFinanceStaff]

    def perform_content_negotiation(self, request, force=False):
        # ``format`` names the spreadsheet type here, not a DRF renderer.
        return super().perform_content_negotiation(request, force=True)

    def get(self, request):
        month, year = _period_from(request.query_params)
        file_format = (request.query_params.get("format") or "xlsx").lower()
        if file_format not in ("xlsx", "csv"):
            raise ValidationError({"format": "Format harus xlsx atau csv."})
        try:
            result = build_admin_recap(month, year)
        except DatabaseError as exc:
            return _unavailable(exc)

        filename = f"rekap-bonus-admin-{year}-{month:02d}"
        if file_format == "csv":
            return rows_to_csv_response(result.rows, EXPORT_COLUMNS, filename)
        return rows_to_xlsx_response(
            result.rows, EXPORT_COLUMNS, filename, title=f"Bonus {year}-{month:02d}"
        )
