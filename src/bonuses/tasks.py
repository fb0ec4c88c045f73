"""Celery tasks for the admin bonus module."""
from __future__ import annotations

import logging

from celery import shared_task
from django.db import DatabaseError
from django.utils import timezone

from bonuses.exceptions import PeriodBoundaryError, PersistenceBatchError

logger = logging.getLogger("keuangan")


@shared_task(bind=True, max_retries=3, default_retry_delay=30)
def recompute_admin_recap(self, *, month: int, year: int, admin_codes=None):
    """Reconcile and save the recap of one month.

    A partial failure is retried for the failed admin codes only.
    """
    from bonuses.services import save_admin_recap

    try:
        result = save_admin_recap(month, year, admin_codes=admin_codes)
    except PeriodBoundaryError as exc:
        logger.error("recompute_admin_recap: periode tidak valid: %s", exc)
        return None
    except PersistenceBatchError as exc:
        logger.warning(
            "recompute_admin_recap %s-%02d: retry untuk %s",
            year, month, ", ".join(exc.failed_codes),
        )
        raise self.retry(
            exc=exc,
            kwargs={"month": month, "year": year, "admin_codes": exc.failed_codes},
        )
    except DatabaseError as exc:
        logger.exception("recompute_admin_recap %s-%02d gagal: %s", year, month, exc)
        raise self.retry(exc=exc)

    return {
        "month": month,
        "year": year,
        "persisted_codes": result.persisted_codes,
        "skipped_count": result.skipped_count,
    }


@shared_task
def refresh_current_month_recap():
    """
    Run every hour (Celery Beat).
    Keeps the saved recap of the running month in line with new income.
    """
    today = timezone.localdate()
    recompute_admin_recap.delay(month=today.month, year=today.year)
    logger.info("Refresh rekap bonus %s-%02d dijadwalkan", today.year, today.month)
