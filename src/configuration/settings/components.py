# settings/components.py
"""
Setting groups shared by the environment modules.

Each ``get_*`` function reads its own environment variables and returns plain
values; the environment module decides which groups to apply and with which
``debug`` flag.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

LOCAL_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8000",
]


def env_bool(key: str, default: bool = False) -> bool:
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes", "on")


def env_int(key: str, default: int = 0) -> int:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_list(key: str, default: list | None = None) -> list:
    """Comma-separated variable as a list; blank entries are dropped."""
    items = [part.strip() for part in os.environ.get(key, "").split(",")]
    return [item for item in items if item] or list(default or [])


def _service_host(variable: str, docker_host: str) -> str:
    fallback = docker_host if env_bool("DOCKER_ENV") else "localhost"
    return os.environ.get(variable, fallback)


# =============================================================================
# DATABASE
# =============================================================================


def get_database_settings() -> dict:
    """
    PostgreSQL unless USE_SQLITE is set.

    Transactions rely on a partial unique index on the settlement code, which
    both backends support.
    """
    if env_bool("USE_SQLITE"):
        return {
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": BASE_DIR / "db.sqlite3",
            }
        }

    return {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("DB_NAME", "settlement"),
            "USER": os.environ.get("DB_USER", "postgres"),
            "PASSWORD": os.environ.get("DB_PASSWORD", "postgres"),
            "HOST": _service_host("DB_HOST", "db"),
            "PORT": env_int("DB_PORT_NUMBER", 5432),
            "CONN_MAX_AGE": env_int("DB_CONN_MAX_AGE", 60),
            "CONN_HEALTH_CHECKS": True,
            "OPTIONS": {
                "connect_timeout": 10,
                "sslmode": os.environ.get("DB_SSLMODE", "prefer"),
            },
        }
    }


# =============================================================================
# REDIS / CACHE
# =============================================================================


def get_redis_settings() -> dict:
    host = _service_host("REDIS_HOST", "redis")
    port = env_int("REDIS_PORT_NUMBER", 6379)
    password = os.environ.get("REDIS_PASSWORD", "")
    db = env_int("REDIS_DB", 0)

    auth = f":{password}@" if password else ""
    return {
        "url": f"redis://{auth}{host}:{port}/{db}",
        "host": host,
        "port": port,
        "db": db,
    }


def get_cache_settings(redis_url: str) -> dict:
    """django-redis cache; also holds the cached purchase rate-limit policy."""
    return {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": redis_url,
            "TIMEOUT": env_int("CACHE_DEFAULT_TIMEOUT", 300),
            "KEY_PREFIX": "settlement",
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "SOCKET_CONNECT_TIMEOUT": 5,
                "SOCKET_TIMEOUT": 5,
                "CONNECTION_POOL_KWARGS": {"max_connections": 50},
            },
        },
    }


# =============================================================================
# CELERY
# =============================================================================


def get_celery_settings(redis_url: str) -> dict:
    """
    Celery settings, applied through ``app.config_from_object`` with the
    CELERY namespace.

    The beat schedule runs the transaction expiry sweep, which is what frees
    settlement codes held by abandoned transactions.
    """
    from celery.schedules import crontab

    expiry_minutes = env_int("SETTLEMENT_EXPIRY_SWEEP_MINUTES", 15)

    return {
        "CELERY_BROKER_URL": os.environ.get("CELERY_BROKER_URL", redis_url),
        "CELERY_RESULT_BACKEND": os.environ.get("CELERY_RESULT_BACKEND", redis_url),
        "CELERY_ACCEPT_CONTENT": ["json"],
        "CELERY_TASK_SERIALIZER": "json",
        "CELERY_RESULT_SERIALIZER": "json",
        "CELERY_TIMEZONE": "UTC",
        "CELERY_ENABLE_UTC": True,
        "CELERY_TASK_TIME_LIMIT": env_int("CELERY_TASK_TIME_LIMIT", 300),
        "CELERY_TASK_SOFT_TIME_LIMIT": env_int("CELERY_TASK_SOFT_TIME_LIMIT", 240),
        "CELERY_TASK_IGNORE_RESULT": True,
        "CELERY_WORKER_CONCURRENCY": env_int("CELERY_WORKER_CONCURRENCY", 2),
        "CELERY_WORKER_PREFETCH_MULTIPLIER": 1,
        "CELERY_BEAT_SCHEDULER": "django_celery_beat.schedulers:DatabaseScheduler",
        "CELERY_BEAT_SCHEDULE": {
            "expire-stale-transactions": {
                "task": "billing.tasks.tasks.expire_stale_transactions_task",
                "schedule": crontab(minute=f"*/{expiry_minutes}"),
            },
        },
        "CELERY_TASK_ROUTES": {
            "billing.tasks.tasks.*": {"queue": "billing"},
        },
    }


# =============================================================================
# CORS / SECURITY / HOSTS
# =============================================================================


def get_cors_settings(debug: bool = False) -> dict:
    """Local front-end origins in debug, CORS_ALLOWED_ORIGINS otherwise."""
    origins = LOCAL_ORIGINS if debug else env_list("CORS_ALLOWED_ORIGINS")
    return {
        "CORS_ALLOW_ALL_ORIGINS": env_bool("CORS_ALLOW_ALL_ORIGINS", debug),
        "CORS_ALLOWED_ORIGINS": origins,
        "CORS_ALLOW_CREDENTIALS": True,
        "CORS_ALLOW_HEADERS": [
            "accept",
            "authorization",
            "content-type",
            "origin",
            "user-agent",
            "x-request-id",
            "x-requested-with",
        ],
        "CORS_ALLOW_METHODS": ["GET", "OPTIONS", "POST"],
        "CORS_EXPOSE_HEADERS": ["retry-after", "x-request-id"],
        "CSRF_TRUSTED_ORIGINS": origins,
    }


def get_security_settings(debug: bool = False) -> dict:
    if debug:
        return {
            "SECURE_SSL_REDIRECT": False,
            "SESSION_COOKIE_SECURE": False,
            "CSRF_COOKIE_SECURE": False,
            "SECURE_HSTS_SECONDS": 0,
            "X_FRAME_OPTIONS": "SAMEORIGIN",
        }

    return {
        "SECURE_SSL_REDIRECT": env_bool("SECURE_SSL_REDIRECT", True),
        "SECURE_PROXY_SSL_HEADER": ("HTTP_X_FORWARDED_PROTO", "https"),
        "SECURE_HSTS_SECONDS": env_int("SECURE_HSTS_SECONDS", 31536000),
        "SECURE_HSTS_INCLUDE_SUBDOMAINS": True,
        "SESSION_COOKIE_SECURE": True,
        "CSRF_COOKIE_SECURE": True,
        "SECURE_CONTENT_TYPE_NOSNIFF": True,
        "SECURE_REFERRER_POLICY": "strict-origin-when-cross-origin",
        "X_FRAME_OPTIONS": "DENY",
    }


def get_allowed_hosts(debug: bool = False) -> list:
    """ALLOWED_HOSTS from the environment, falling back to "*" in debug."""
    return env_list("ALLOWED_HOSTS", ["*"] if debug else ["localhost", "127.0.0.1"])


def service_settings(*, cors_debug: bool, security_debug: bool) -> dict:
    """Everything an environment backed by PostgreSQL and Redis needs."""
    redis_url = get_redis_settings()["url"]
    return {
        "DATABASES": get_database_settings(),
        "CACHES": get_cache_settings(redis_url),
        "ALLOWED_HOSTS": get_allowed_hosts(debug=security_debug),
        **get_celery_settings(redis_url),
        **get_cors_settings(debug=cors_debug),
        **get_security_settings(debug=security_debug),
    }
