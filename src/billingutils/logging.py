# billingutils/logging.py
"""
structlog setup for the settlement engine.

Console output is colored key/value text while DEBUG is on and JSON lines
otherwise. Rotating files always receive JSON through python-json-logger, and
warnings from the billing app (bookkeeping failures among them) also go to a
separate file so they can be reconciled.

    from billingutils.logging import get_logger

    logger = get_logger(__name__)
    logger.warning("bookkeeping_failed", step="voucher_usage", transaction_id=txn_id)
"""

import logging
import logging.config
import sys
import uuid
from datetime import UTC, datetime
from pathlib import Path

import structlog
from django.conf import settings
from structlog.types import EventDict, Processor

APP_NAME = "settlement-engine"
KEY_ORDER = ("timestamp", "level", "logger", "message")


def is_development() -> bool:
    return bool(getattr(settings, "DEBUG", False))


def get_log_level() -> int:
    level = logging.getLevelName(getattr(settings, "LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def get_logs_dir() -> Path:
    logs_dir = Path(getattr(settings, "LOGS_DIR", Path(settings.BASE_DIR) / "logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


# =============================================================================
# PROCESSORS
# =============================================================================


def add_service_context(logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp app, environment and a UTC timestamp on every entry."""
    event_dict.setdefault("app", APP_NAME)
    event_dict.setdefault("environment", getattr(settings, "ENVIRONMENT", "unknown"))
    event_dict["timestamp"] = datetime.now(UTC).isoformat().replace("+00:00", "Z")
    return event_dict


def event_to_message(logger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["message"] = event_dict.pop("event", "")
    return event_dict


def drop_exc_info_below_error(logger, method_name: str, event_dict: EventDict) -> EventDict:
    if event_dict.get("level") not in ("error", "critical"):
        event_dict.pop("exc_info", None)
        event_dict.pop("exception", None)
    return event_dict


def order_keys(logger, method_name: str, event_dict: EventDict) -> EventDict:
    ordered = {key: event_dict.pop(key) for key in KEY_ORDER if key in event_dict}
    ordered.update(event_dict)
    return ordered


def build_processors(development: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        event_to_message,
    ]
    if development:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.plain_traceback
            )
        )
    else:
        processors += [drop_exc_info_below_error, order_keys, structlog.processors.JSONRenderer()]
    return processors


# =============================================================================
# CONFIGURATION
# =============================================================================


def _rotating_file(path: Path, level: str, backups: int = 5) -> dict:
    return {
        "level": level,
        "class": "logging.handlers.RotatingFileHandler",
        "filename": path,
        "maxBytes": 10 * 1024 * 1024,
        "backupCount": backups,
        "formatter": "json",
    }


def get_standard_logging_config() -> dict:
    """dictConfig for Django, Celery and the billing app loggers."""
    logs_dir = get_logs_dir()
    level = get_log_level()

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "console": {"level": level, "class": "logging.StreamHandler", "stream": sys.stdout},
            "file": _rotating_file(logs_dir / "settlement.log", "INFO"),
            "billing_warnings": _rotating_file(
                logs_dir / "billing_warnings.log", "WARNING", backups=10
            ),
        },
        "loggers": {
            "django": {"handlers": ["console", "file"], "level": level, "propagate": False},
            "celery": {"handlers": ["console", "file"], "level": "INFO", "propagate": False},
            "billing": {
                "handlers": ["console", "file", "billing_warnings"],
                "level": "DEBUG" if is_development() else "INFO",
                "propagate": False,
            },
        },
        "root": {"handlers": ["console", "file"], "level": level},
    }


def configure_structlog() -> None:
    structlog.configure(
        processors=build_processors(is_development()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    """Called once from BillingConfig.ready()."""
    logging.config.dictConfig(get_standard_logging_config())
    configure_structlog()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# =============================================================================
# REQUEST AND TASK CONTEXT
# =============================================================================


class StructlogMiddleware:
    """
    Binds a request id (taken from X-Request-ID when the caller sends one),
    the method, path and user to the log context, and echoes the id back in
    the response header.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        structlog.contextvars.clear_contextvars()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.request_id = request_id
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            request_method=request.method,
            request_path=request.path,
        )

        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            structlog.contextvars.bind_contextvars(user_id=user.pk)

        response = self.get_response(request)
        response["X-Request-ID"] = request_id
        get_logger("billing.request").info("request_completed", status_code=response.status_code)
        return response


class CeleryLogger:
    """Logger factory for Celery tasks; binds the running task's name and id."""

    @staticmethod
    def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
        from celery import current_task

        if current_task:
            structlog.contextvars.bind_contextvars(
                task_name=current_task.name,
                task_id=current_task.request.id,
            )
        return get_logger(name)


__all__ = [
    "CeleryLogger",
    "StructlogMiddleware",
    "configure_logging",
    "get_logger",
    "get_standard_logging_config",
]
