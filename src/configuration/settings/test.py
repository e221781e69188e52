# settings/test.py
"""
Test settings: in-memory SQLite, local-memory cache, eager Celery.

Selected when DJANGO_ENV is test or testing. No external service is needed.
"""

from .base import *
from .components import get_cors_settings, get_security_settings

ENVIRONMENT = "test"
DEBUG = True
USE_STRUCTURED_LOGGING = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

globals().update(get_cors_settings(debug=True))
globals().update(get_security_settings(debug=True))

ALLOWED_HOSTS = ["*"]

AUTH_PASSWORD_VALIDATORS = []
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Fixed transfer details so payment instructions are predictable
SETTLEMENT_ENGINE = {
    **SETTLEMENT_ENGINE,
    "PAYMENT_INSTRUCTIONS": {
        "bank_name": "BCA",
        "account_number": "1234567890",
        "account_name": "PT Example Indonesia",
    },
}
