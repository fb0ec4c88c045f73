"""Domain errors raised by the admin bonus recap core."""
from __future__ import annotations


class BonusRecapError(Exception):
    """Base class for every error raised by the bonus recap module."""


class InvalidInputError(BonusRecapError, ValueError):
    """A negative target revenue, income or tier reached the calculator."""


class PeriodBoundaryError(BonusRecapError, ValueError):
    """Month/year pair that does not describe a calendar month."""


class PersistenceBatchError(BonusRecapError):
    """Writing the recap batch failed for some (or all) admin codes.

    ``failed_codes`` lists the admin codes that were not written so the caller
    can retry only those; ``persisted_codes`` lists the ones that went through.
    """

    def __init__(self, failed_codes, persisted_codes=(), errors=None):
        self.failed_codes = list(failed_codes)
        self.persisted_codes = list(persisted_codes)
        self.errors = dict(errors or {})
        super().__init__(
            "Gagal menyimpan rekap untuk admin: " + ", ".join(self.failed_codes)
        )
