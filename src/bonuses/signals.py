"""Signals: recompute the admin bonus recap when its inputs change."""
from __future__ import annotations

import logging

from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver
from django.utils import timezone

logger = logging.getLogger("keuangan")


def _queue_recompute(periods) -> None:
    periods = sorted(set(periods))

    def _dispatch() -> None:
        from bonuses.tasks import recompute_admin_recap

        for year, month in periods:
            try:
                recompute_admin_recap.delay(month=month, year=year)
            except Exception as exc:
                # Never let a signal crash a finance write.
                logger.warning(
                    "Dispatch rekap bonus %s-%02d gagal: %s", year, month, exc, exc_info=True
                )

    # After commit so the worker reads the committed income.
    transaction.on_commit(_dispatch)


def _period_of(day):
    return (day.year, day.month)


def _current_period():
    return _period_of(timezone.localdate())


@receiver(pre_save, sender="bonuses.AdminIncome")
def on_income_pre_save(sender, instance, **kwargs):
    """Remember the previous date so moving a record also refreshes its old month."""
    if instance._state.adding:
        instance._previous_date = None
        return
    previous = sender.objects.filter(pk=instance.pk).only("date").first()
    instance._previous_date = getattr(previous, "date", None)


@receiver(post_save, sender="bonuses.AdminIncome")
def on_income_saved(sender, instance, **kwargs):
    periods = [_period_of(instance.date)]
    previous_date = getattr(instance, "_previous_date", None)
    if previous_date is not None:
        periods.append(_period_of(previous_date))
    _queue_recompute(periods)


@receiver(post_delete, sender="bonuses.AdminIncome")
def on_income_deleted(sender, instance, **kwargs):
    _queue_recompute([_period_of(instance.date)])


@receiver(post_save, sender="bonuses.AdminTargetSetting")
@receiver(post_delete, sender="bonuses.AdminTargetSetting")
def on_target_setting_changed(sender, instance, **kwargs):
    # Settings are not versioned, only the running month is refreshed.
    _queue_recompute([_current_period()])
