# billing/services/rate_limit.py
"""
Purchase attempt rate limiting.

In-memory sliding window per caller identity. The policy comes from the
RateLimitSettings table and is cached through the Django cache. When the
policy cannot be read the defaults apply, and callers treat any limiter error
as "allowed": pricing must keep working without this component.
"""

import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import asdict, dataclass

from django.core.cache import cache
from django.db import DatabaseError

from billingutils.logging import get_logger

logger = get_logger(__name__)

POLICY_CACHE_KEY = "billing:purchase_rate_limit_policy"


@dataclass(frozen=True)
class RateLimitPolicy:
    max_attempts: int = 5
    window_seconds: int = 15 * 60
    block_seconds: int = 30 * 60
    enabled: bool = True

    @classmethod
    def from_settings_row(cls, row) -> "RateLimitPolicy":
        return cls(
            max_attempts=row.max_attempts,
            window_seconds=row.window_minutes * 60,
            block_seconds=row.block_duration_minutes * 60,
            enabled=row.is_enabled,
        )


DEFAULT_POLICY = RateLimitPolicy()


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int | None = None


class PurchaseRateLimiter:
    """Sliding-window limiter keyed by caller identity."""

    def __init__(
        self,
        policy_ttl: int = 60,
        cleanup_interval: int = 5 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.policy_ttl = policy_ttl
        self.cleanup_interval = cleanup_interval
        self.clock = clock
        self._attempts: dict[str, deque[float]] = {}
        self._blocked_until: dict[str, float] = {}
        self._lock = threading.Lock()
        self._last_cleanup = clock()

    def policy(self) -> RateLimitPolicy:
        cached = cache.get(POLICY_CACHE_KEY)
        if cached is not None:
            return RateLimitPolicy(**cached)

        from billing.models import RateLimitSettings

        try:
            row = RateLimitSettings.current()
        except DatabaseError as exc:
            logger.warning("rate_limit_policy_unavailable", error=str(exc))
            return DEFAULT_POLICY

        policy = RateLimitPolicy.from_settings_row(row) if row else DEFAULT_POLICY
        cache.set(POLICY_CACHE_KEY, asdict(policy), self.policy_ttl)
        return policy

    @staticmethod
    def clear_cached_policy() -> None:
        cache.delete(POLICY_CACHE_KEY)

    def hit(self, identity: str) -> RateLimitDecision:
        """Record an attempt by ``identity`` and decide whether it may proceed."""
        policy = self.policy()
        if not policy.enabled:
            return RateLimitDecision(allowed=True, remaining=policy.max_attempts)

        now = self.clock()
        with self._lock:
            self._cleanup(now, policy)

            blocked_until = self._blocked_until.get(identity)
            if blocked_until is not None:
                if blocked_until > now:
                    return RateLimitDecision(
                        allowed=False,
                        remaining=0,
                        retry_after=math.ceil(blocked_until - now),
                    )
                del self._blocked_until[identity]

            window = self._attempts.setdefault(identity, deque())
            horizon = now - policy.window_seconds
            while window and window[0] <= horizon:
                window.popleft()

            if len(window) >= policy.max_attempts:
                self._blocked_until[identity] = now + policy.block_seconds
                self._attempts.pop(identity, None)
                logger.warning(
                    "purchase_rate_limited",
                    identity=identity,
                    max_attempts=policy.max_attempts,
                    block_seconds=policy.block_seconds,
                )
                return RateLimitDecision(
                    allowed=False, remaining=0, retry_after=policy.block_seconds
                )

            window.append(now)
            return RateLimitDecision(
                allowed=True, remaining=policy.max_attempts - len(window)
            )

    def reset(self, identity: str | None = None) -> None:
        with self._lock:
            if identity is None:
                self._attempts.clear()
                self._blocked_until.clear()
            else:
                self._attempts.pop(identity, None)
                self._blocked_until.pop(identity, None)

    def _cleanup(self, now: float, policy: RateLimitPolicy) -> None:
        if now - self._last_cleanup < self.cleanup_interval:
            return
        self._last_cleanup = now
        horizon = now - policy.window_seconds
        expired_blocks = [k for k, until in self._blocked_until.items() if until <= now]
        for identity in expired_blocks:
            del self._blocked_until[identity]
        idle = [
            k for k, window in self._attempts.items() if not window or window[-1] <= horizon
        ]
        for identity in idle:
            del self._attempts[identity]


purchase_rate_limiter = PurchaseRateLimiter()
