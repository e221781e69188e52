# billing/apis/throttling.py

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle

from billing.services.rate_limit import purchase_rate_limiter
from billingutils.logging import get_logger

logger = get_logger(__name__)


class PurchaseAttemptThrottle(BaseThrottle):
    """
    DRF throttle backed by the purchase rate limiter.

    Limiter failures let the request through.
    """

    limiter = purchase_rate_limiter

    def __init__(self):
        self._retry_after = None

    def get_identity(self, request) -> str:
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            return f"user:{user.pk}"
        return f"ip:{self.get_ident(request)}"

    def allow_request(self, request, view) -> bool:
        try:
            decision = self.limiter.hit(self.get_identity(request))
        except Exception as exc:
            logger.error("purchase_rate_limiter_failed", error=str(exc))
            return True
        self._retry_after = decision.retry_after
        return decision.allowed

    def wait(self):
        return self._retry_after


class RateLimitedResponseMixin:
    """Render throttled purchase attempts in the pricing error shape."""

    def handle_exception(self, exc):
        if isinstance(exc, exceptions.Throttled):
            response = Response(
                {
                    "error": "RATE_LIMITED",
                    "message": "Too many purchase attempts, please try again later",
                    "details": {"retry_after": exc.wait},
                },
                status=status.HTTP_429_TOO_MANY_REQUESTS,
            )
            if exc.wait:
                response["Retry-After"] = str(exc.wait)
            return response
        return super().handle_exception(exc)
