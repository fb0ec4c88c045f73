"""Development settings."""
import os

os.environ.setdefault("DEBUG", "True")
os.environ.setdefault("SECRET_KEY", "dev-only-secret-key")

from .base import *  # noqa: F401,F403,E402

DEBUG = True

# Email
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

# CORS
CORS_ALLOW_ALL_ORIGINS = True

# Logging
LOGGING["root"]["level"] = "DEBUG"  # noqa: F405
