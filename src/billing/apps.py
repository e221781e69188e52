# billing/apps.py
"""
Django app configuration for the billing application.

Configures structured logging and registers signal handlers on startup.
"""

from django.apps import AppConfig


class BillingConfig(AppConfig):
    """Configuration for the billing Django application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "billing"
    verbose_name = "Billing"

    def ready(self) -> None:
        from django.conf import settings

        if getattr(settings, "USE_STRUCTURED_LOGGING", True):
            from billingutils.logging import configure_logging

            configure_logging()

        import billing.signals  # noqa: F401
