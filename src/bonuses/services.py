"""Service functions for the admin bonus recap."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bonuses.exceptions import PersistenceBatchError
from bonuses.persistence import load_recap_inputs, upsert_recap_rows
from bonuses.reconciler import ReconcileResult, only_codes, reconcile

logger = logging.getLogger("keuangan")


@dataclass
class RecapSaveResult:
    persisted_codes: list[str] = field(default_factory=list)
    skipped_count: int = 0


def build_admin_recap(month, year) -> ReconcileResult:
    """Compute the recap of ``month``/``year`` without writing anything."""
    inputs = load_recap_inputs(month, year)
    return reconcile(
        inputs.admin_codes,
        inputs.settings,
        inputs.income_by_admin,
        inputs.existing,
        month,
        year,
    )


def save_admin_recap(month, year, admin_codes=None) -> RecapSaveResult:
    """Reconcile ``month``/``year`` and write back the rows that changed.

    Parameters
    ----------
    month, year : int
    admin_codes : iterable of str, optional
        Restrict the write to these admins (used to retry a partial failure).

    Returns
    -------
    RecapSaveResult

    Raises
    ------
    PeriodBoundaryError
        If the period is not a calendar month.
    PersistenceBatchError
        If some rows could not be written. The others are kept.
    """
    result = build_admin_recap(month, year)
    to_persist = only_codes(result.to_persist, admin_codes)
    skipped = len(result.rows) - len(to_persist)

    try:
        persisted = upsert_recap_rows(to_persist)
    except PersistenceBatchError as exc:
        logger.error(
            "Rekap bonus %s-%02d: %d tersimpan, gagal untuk %s",
            year, int(month), len(exc.persisted_codes), ", ".join(exc.failed_codes),
        )
        raise

    logger.info(
        "Rekap bonus %s-%02d: %d admin, %d disimpan, %d tidak berubah",
        year, int(month), len(result.rows), len(persisted), skipped,
    )
    return RecapSaveResult(persisted_codes=persisted, skipped_count=skipped)
