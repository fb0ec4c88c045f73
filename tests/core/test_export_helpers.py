"""Tests for CSV / XLSX export helpers."""
import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import BytesIO
from types import SimpleNamespace

from django.http import HttpResponse
from openpyxl import load_workbook

from bonuses.models import AdminIncome
from core.export import XLSX_CONTENT_TYPE, rows_to_csv_response, rows_to_xlsx_response
from core.logging import JSONFormatter


class TestCsvExportUtil:
    def test_basic_export(self, march_income):
        qs = AdminIncome.objects.filter(code="B02")
        columns = [
            ("code", "Kode"),
            ("amount", "Nominal"),
        ]
        resp = rows_to_csv_response(qs, columns, "test")
        assert isinstance(resp, HttpResponse)
        assert resp["Content-Type"] == "text/csv; charset=utf-8"
        assert "test.csv" in resp["Content-Disposition"]
        content = resp.content.decode("utf-8-sig")
        assert "Kode,Nominal" in content
        assert "B02,1500000.00" in content

    def test_callable_column_and_none(self):
        rows = [SimpleNamespace(code=None, date=date(2024, 3, 1))]
        columns = [
            ("code", "Kode"),
            (lambda o: o.date.strftime("%d/%m/%Y"), "Tanggal"),
        ]
        resp = rows_to_csv_response(rows, columns, "test2")
        content = resp.content.decode("utf-8-sig")
        assert content.strip().splitlines()[1] == ",01/03/2024"

    def test_empty_rows(self, db):
        resp = rows_to_csv_response(AdminIncome.objects.none(), [("code", "Kode")], "empty")
        content = resp.content.decode("utf-8-sig")
        lines = content.strip().split("\n")
        assert len(lines) == 1  # header only


class TestXlsxExportUtil:
    def test_header_and_values(self):
        rows = [
            SimpleNamespace(
                code="A01",
                amount=Decimal("1250.50"),
                paid_at=datetime(2024, 4, 1, 8, 30, tzinfo=timezone.utc),
            ),
        ]
        columns = [("code", "Kode"), ("amount", "Nominal"), ("paid_at", "Dibayar")]

        resp = rows_to_xlsx_response(rows, columns, "bonus", title="Rekap")

        assert resp["Content-Type"] == XLSX_CONTENT_TYPE
        assert 'filename="bonus.xlsx"' in resp["Content-Disposition"]
        sheet = load_workbook(BytesIO(resp.content)).active
        assert sheet.title == "Rekap"
        assert [c.value for c in sheet[1]] == ["Kode", "Nominal", "Dibayar"]
        assert sheet["A1"].font.bold
        assert sheet["B2"].value == 1250.5
        assert sheet["C2"].value == datetime(2024, 4, 1, 8, 30)


def test_json_formatter_keeps_extra_fields():
    record = logging.LogRecord("keuangan", logging.INFO, __file__, 1, "rekap %s", ("2024-03",), None)
    record.admin_code = "A01"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "rekap 2024-03"
    assert payload["logger"] == "keuangan"
    assert payload["admin_code"] == "A01"
