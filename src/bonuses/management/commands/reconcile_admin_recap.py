"""Reconcile the saved admin bonus recap of one month."""
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from bonuses.exceptions import PeriodBoundaryError, PersistenceBatchError
from bonuses.reconciler import summarize
from bonuses.persistence import upsert_recap_rows
from bonuses.services import build_admin_recap


class Command(BaseCommand):
    help = "Recompute the admin bonus recap of a month and save the rows that changed"

    def add_arguments(self, parser):
        today = timezone.localdate()
        parser.add_argument("--month", type=int, default=today.month, help="Bulan (1-12), default bulan berjalan")
        parser.add_argument("--year", type=int, default=today.year, help="Tahun, default tahun berjalan")
        parser.add_argument("--dry-run", action="store_true", help="Only show what would be written")

    def handle(self, *args, **options):
        month, year = options["month"], options["year"]
        try:
            result = build_admin_recap(month, year)
        except PeriodBoundaryError as exc:
            raise CommandError(str(exc))

        totals = summarize(result.rows)
        self.stdout.write(
            f"Periode {year}-{month:02d}: {totals['admin_count']} admin, "
            f"pendapatan {totals['total_income']}, bonus {totals['total_bonus']}"
        )
        for row in result.to_persist:
            self.stdout.write(
                f"  {row.admin_code}: {row.actual_income} / {row.target_revenue} "
                f"-> {row.achievement_percent}% bonus {row.bonus_amount}"
            )

        if options["dry_run"]:
            self.stdout.write(self.style.WARNING(
                f"Dry run: {len(result.to_persist)} baris akan disimpan, tidak ada yang ditulis."
            ))
            return

        try:
            persisted = upsert_recap_rows(result.to_persist)
        except PersistenceBatchError as exc:
            raise CommandError(str(exc))
        self.stdout.write(self.style.SUCCESS(
            f"Rekap tersimpan: {len(persisted)} baris, "
            f"{len(result.rows) - len(persisted)} tidak berubah"
        ))
