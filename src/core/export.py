"""CSV / Excel export utilities."""
import csv
from datetime import date, datetime
from decimal import Decimal

from django.http import HttpResponse

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _cell(obj, field):
    if callable(field):
        return field(obj)
    val = getattr(obj, field, "")
    return val if val is not None else ""


def _iter_objects(rows):
    # Querysets are streamed, plain lists are iterated as-is.
    iterator = getattr(rows, "iterator", None)
    return iterator() if callable(iterator) else iter(rows)


def rows_to_csv_response(rows, columns, filename):
    """Convert a queryset or a list of objects to a CSV HttpResponse.

    Args:
        rows: Django QuerySet or any iterable of objects
        columns: list of (field_name_or_callable, header_label) tuples.
            If field_name_or_callable is a string, getattr(obj, field) is used.
            If it's callable, it's called with the object.
        filename: download filename (without extension)
    """
    response = HttpResponse(content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}.csv"'
    # UTF-8 BOM for Excel compatibility
    response.write("\ufeff")

    writer = csv.writer(response)
    writer.writerow([col[1] for col in columns])

    for obj in _iter_objects(rows):
        writer.writerow([str(_cell(obj, field)) for field, _ in columns])

    return response


def rows_to_xlsx_response(rows, columns, filename, title="Data"):
    """Same contract as ``rows_to_csv_response`` but renders an .xlsx sheet."""
    from openpyxl import Workbook
    from openpyxl.styles import Font

    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    ws.append([col[1] for col in columns])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for obj in _iter_objects(rows):
        ws.append([_xlsx_value(_cell(obj, field)) for field, _ in columns])

    response = HttpResponse(content_type=XLSX_CONTENT_TYPE)
    response["Content-Disposition"] = f'attachment; filename="{filename}.xlsx"'
    wb.save(response)
    return response


def _xlsx_value(value):
    # openpyxl refuses timezone-aware datetimes.
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    if isinstance(value, (str, int, float, Decimal, date)):
        return value
    return str(value)
