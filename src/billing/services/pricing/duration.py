# billing/services/pricing/duration.py
"""
Billable duration and unit price for add-on purchases.

Two policies:
- fixed_30_days: a full period at the monthly rate, starting now.
- following_subscription: pro-rata up to the current subscription's end,
  rejected when fewer than ``min_following_days`` remain.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from billing.models.choices import DurationMode

from .config import PricingConfig
from .errors import InvalidInput, SubscriptionExpiringTooSoon, SubscriptionRequired
from .money import prorate

logger = logging.getLogger(__name__)


def remaining_days(end: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``end``, rounded up."""
    delta = end - now
    partial = 1 if (delta.seconds or delta.microseconds) else 0
    return delta.days + partial


@dataclass(frozen=True)
class DurationQuote:
    mode: str
    addon_type: str
    quantity: int
    unit_price: int
    subtotal: int
    billable_days: int
    effective_start: datetime
    effective_end: datetime
    subscription_id: int | None = None

    @property
    def product_id(self) -> str:
        suffix = "fixed" if self.mode == DurationMode.FIXED_30_DAYS.value else "prorata"
        return f"addon-{self.addon_type}-{self.quantity}-{suffix}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration_mode": self.mode,
            "addon_type": self.addon_type,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "subtotal": self.subtotal,
            "billable_days": self.billable_days,
            "effective_start": self.effective_start.isoformat(),
            "effective_end": self.effective_end.isoformat(),
        }


class DurationPricer:
    """Prices add-ons against the buyer's active subscription."""

    def __init__(self, config: PricingConfig | None = None):
        self.config = config or PricingConfig.from_settings()

    def monthly_rate(self, addon_type: str) -> int:
        try:
            return self.config.addon_monthly_rates[addon_type]
        except KeyError:
            raise InvalidInput(
                f"Unknown add-on type: {addon_type}",
                details={"addon_type": addon_type},
            ) from None

    def validate_quantity(self, quantity: int) -> None:
        low, high = self.config.addon_quantity_min, self.config.addon_quantity_max
        valid_type = isinstance(quantity, int) and not isinstance(quantity, bool)
        if not valid_type or not low <= quantity <= high:
            raise InvalidInput(
                f"Quantity must be between {low} and {high}",
                details={"quantity": quantity},
            )

    def check_request(self, addon_type: str, quantity: int, mode: str) -> int:
        """Validate the add-on request and return its monthly rate."""
        if mode not in DurationMode.values():
            raise InvalidInput(
                f"Unknown duration mode: {mode}", details={"duration_mode": mode}
            )
        self.validate_quantity(quantity)
        return self.monthly_rate(addon_type)

    def quote(
        self,
        *,
        addon_type: str,
        quantity: int,
        mode: str,
        now: datetime,
        subscription_end: datetime,
        subscription_id: int | None = None,
    ) -> DurationQuote:
        """Price an add-on given the end of the buyer's subscription."""
        rate = self.check_request(addon_type, quantity, mode)
        period = self.config.fixed_duration_days

        if mode == DurationMode.FIXED_30_DAYS.value:
            days = period
            unit_price = rate
            effective_end = now + timedelta(days=period)
        else:
            days = remaining_days(subscription_end, now)
            if days < self.config.min_following_days:
                raise SubscriptionExpiringTooSoon(
                    f"Subscription ends in {days} days; at least "
                    f"{self.config.min_following_days} are required",
                    details={
                        "remaining_days": days,
                        "minimum_days": self.config.min_following_days,
                    },
                )
            unit_price = prorate(rate, days, period)
            effective_end = subscription_end

        return DurationQuote(
            mode=mode,
            addon_type=addon_type,
            quantity=quantity,
            unit_price=unit_price,
            subtotal=unit_price * quantity,
            billable_days=days,
            effective_start=now,
            effective_end=effective_end,
            subscription_id=subscription_id,
        )

    def price(
        self, user, *, addon_type: str, quantity: int, mode: str, now: datetime
    ) -> DurationQuote:
        """Look up the buyer's active subscription and price the add-on."""
        from billing.models import Subscription

        self.check_request(addon_type, quantity, mode)
        subscription = Subscription.current_for(user, now)
        if subscription is None:
            logger.info(f"Add-on purchase by user {user.pk} without active subscription")
            raise SubscriptionRequired()

        return self.quote(
            addon_type=addon_type,
            quantity=quantity,
            mode=mode,
            now=now,
            subscription_end=subscription.end_date,
            subscription_id=subscription.subscription_id,
        )
