# settings/production.py
"""
Production: DEBUG off, HTTPS enforced, required secrets validated at import.

Selected when DJANGO_ENV is production or prod. Transfer instructions come
from SETTLEMENT_BANK_NAME / SETTLEMENT_ACCOUNT_* unless a PaymentSettings row
overrides them.
"""

from .base import *
from .base import _validate_required_settings
from .components import service_settings

ENVIRONMENT = "production"
DEBUG = False

_validate_required_settings()

globals().update(service_settings(cors_debug=False, security_debug=False))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

if os.environ.get("SENTRY_DSN"):
    import sentry_sdk
    from sentry_sdk.integrations.celery import CeleryIntegration
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=os.environ["SENTRY_DSN"],
        integrations=[DjangoIntegration(), CeleryIntegration()],
        traces_sample_rate=float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "0.1")),
        send_default_pii=False,
        environment=ENVIRONMENT,
    )
