# settings/staging.py
"""
Staging: production security with DEBUG and permissive CORS for troubleshooting.

Selected when DJANGO_ENV is staging or stage.
"""

from .base import *
from .components import service_settings

ENVIRONMENT = "staging"
DEBUG = True

globals().update(service_settings(cors_debug=True, security_debug=False))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()

if os.environ.get("SENTRY_DSN"):
    import sentry_sdk
    from sentry_sdk.integrations.celery import CeleryIntegration
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=os.environ["SENTRY_DSN"],
        integrations=[DjangoIntegration(), CeleryIntegration()],
        traces_sample_rate=float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "0.5")),
        send_default_pii=False,
        environment=ENVIRONMENT,
    )
