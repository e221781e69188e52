# settings/base.py
"""
Settings shared by every environment.

Environment modules import everything from here and then apply their own
database, cache, Celery, CORS and security groups from components.py.
"""

import contextlib
import json
import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Must run before anything below reads os.environ
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DJANGO_ENV = os.environ.get("DJANGO_ENV", "development").lower()
IS_PRODUCTION = DJANGO_ENV in ("production", "prod")


def _validate_required_settings():
    """Raise ImproperlyConfigured listing every missing production variable."""
    from django.core.exceptions import ImproperlyConfigured

    missing = [
        var
        for var in ("SECRET_KEY", "DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST")
        if not os.environ.get(var)
    ]
    if os.environ.get("SECRET_KEY") == "change-me":
        missing.append("SECRET_KEY")

    if missing:
        raise ImproperlyConfigured(
            f"Missing required environment variables: {', '.join(sorted(set(missing)))}"
        )


# =============================================================================
# CORE
# =============================================================================

SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-settlement-dev-key")
DEBUG = False
ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
AUTH_USER_MODEL = "billing.User"
APPEND_SLASH = False

ROOT_URLCONF = "configuration.urls"
WSGI_APPLICATION = "configuration.wsgi.application"
ASGI_APPLICATION = "configuration.asgi.application"

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # third party
    "rest_framework",
    "corsheaders",
    "django_celery_beat",
    "drf_yasg",
    # local
    "billing",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# Binds request_id, path and user to every structlog entry of a request
USE_STRUCTLOG_MIDDLEWARE = os.environ.get("USE_STRUCTLOG_MIDDLEWARE", "true").lower() == "true"

if USE_STRUCTLOG_MIDDLEWARE:
    with contextlib.suppress(ValueError):
        MIDDLEWARE.insert(
            MIDDLEWARE.index("django.contrib.auth.middleware.AuthenticationMiddleware") + 1,
            "billingutils.logging.StructlogMiddleware",
        )

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": f"django.contrib.auth.password_validation.{name}"}
    for name in (
        "UserAttributeSimilarityValidator",
        "MinimumLengthValidator",
        "CommonPasswordValidator",
        "NumericPasswordValidator",
    )
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"


# =============================================================================
# LOGGING
# =============================================================================

LOGS_DIR = BASE_DIR / "logs"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Applied by billingutils.logging.configure_logging() from BillingConfig.ready()
USE_STRUCTURED_LOGGING = os.environ.get("USE_STRUCTURED_LOGGING", "true").lower() == "true"

# structlog owns the configuration
LOGGING_CONFIG = None


# =============================================================================
# REST FRAMEWORK / JWT / SWAGGER
# =============================================================================

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
    ],
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=2),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "user_id",
    "USER_ID_CLAIM": "user_id",
}

SWAGGER_SETTINGS = {
    "SECURITY_DEFINITIONS": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Access token from the auth service: Bearer <token>",
        }
    },
    "USE_SESSION_AUTH": False,
    "SUPPORTED_SUBMIT_METHODS": ["get", "post"],
}


# =============================================================================
# CELERY / CACHE DEFAULTS (environment modules override)
# =============================================================================

CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_TIMEZONE = TIME_ZONE
CELERY_BEAT_SCHEDULER = "django_celery_beat.schedulers:DatabaseScheduler"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "settlement-default",
    }
}


# =============================================================================
# SETTLEMENT ENGINE
# =============================================================================

# Read by billing.services.pricing.config.PricingConfig.from_settings().
# Bank details here are fallbacks; the PaymentSettings row wins when present.
SETTLEMENT_ENGINE = {
    "TAX_RATE_PERCENT": os.environ.get("SETTLEMENT_TAX_RATE_PERCENT", "11"),
    "SETTLEMENT_CODE_MIN": int(os.environ.get("SETTLEMENT_CODE_MIN", "100")),
    "SETTLEMENT_CODE_MAX": int(os.environ.get("SETTLEMENT_CODE_MAX", "999")),
    "SETTLEMENT_CODE_MAX_ATTEMPTS": int(os.environ.get("SETTLEMENT_CODE_MAX_ATTEMPTS", "10")),
    "FIXED_DURATION_DAYS": 30,
    "MIN_FOLLOWING_DAYS": int(os.environ.get("SETTLEMENT_MIN_FOLLOWING_DAYS", "7")),
    "ADDON_MONTHLY_RATES": json.loads(
        os.environ.get("SETTLEMENT_ADDON_MONTHLY_RATES", '{"extra_accounts": 99000}')
    ),
    "ADDON_QUANTITY_MIN": 1,
    "ADDON_QUANTITY_MAX": int(os.environ.get("SETTLEMENT_ADDON_QUANTITY_MAX", "20")),
    "SUBSCRIPTION_EXPIRY_HOURS": 7 * 24,
    "ADDON_EXPIRY_HOURS": 24,
    "CURRENCY": os.environ.get("SETTLEMENT_CURRENCY", "IDR"),
    "PAYMENT_INSTRUCTIONS": {
        "bank_name": os.environ.get("SETTLEMENT_BANK_NAME", "BCA"),
        "account_number": os.environ.get("SETTLEMENT_ACCOUNT_NUMBER", ""),
        "account_name": os.environ.get("SETTLEMENT_ACCOUNT_NAME", ""),
    },
}
