"""Settings for the test run (pytest-django)."""
import os

os.environ.setdefault("SECRET_KEY", "gymdesk-test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

from .base import *  # noqa

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["root"]["level"] = "ERROR"
for _logger in LOGGING["loggers"].values():
    _logger["level"] = "WARNING"
