"""App config for the admin bonus module."""
from django.apps import AppConfig


class BonusesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "bonuses"
    verbose_name = "Gaji & bonus admin"

    def ready(self):
        import bonuses.signals  # noqa: F401
