# billing/services/pricing/config.py
"""
Pricing configuration value object.

Every engine component receives a PricingConfig at construction instead of
reading module constants, so tests can exercise boundary values directly.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Any

from django.conf import settings

DEFAULT_PAYMENT_INSTRUCTIONS = {
    "method": "bank_transfer",
    "bank_name": "BCA",
    "account_number": "",
    "account_name": "",
}


@dataclass(frozen=True)
class PricingConfig:
    """Tunables shared by every pricing component."""

    tax_rate_percent: Decimal = Decimal("11")
    settlement_code_min: int = 100
    settlement_code_max: int = 999
    settlement_code_max_attempts: int = 10
    fixed_duration_days: int = 30
    min_following_days: int = 7
    addon_monthly_rates: dict[str, int] = field(
        default_factory=lambda: {"extra_accounts": 99000}
    )
    addon_quantity_min: int = 1
    addon_quantity_max: int = 20
    subscription_expiry: timedelta = timedelta(days=7)
    addon_expiry: timedelta = timedelta(hours=24)
    currency: str = "IDR"
    payment_instructions: dict[str, Any] = field(
        default_factory=lambda: dict(DEFAULT_PAYMENT_INSTRUCTIONS)
    )

    def __post_init__(self) -> None:
        if self.tax_rate_percent < 0:
            raise ValueError("tax_rate_percent must not be negative")
        if not 0 <= self.settlement_code_min <= self.settlement_code_max:
            raise ValueError("settlement code range is empty or negative")
        if self.settlement_code_max_attempts < 1:
            raise ValueError("settlement_code_max_attempts must be at least 1")
        if self.addon_quantity_min < 1 or self.addon_quantity_max < self.addon_quantity_min:
            raise ValueError("invalid add-on quantity bounds")

    @classmethod
    def from_settings(cls) -> "PricingConfig":
        """Build the config from ``settings.SETTLEMENT_ENGINE``."""
        conf: dict[str, Any] = getattr(settings, "SETTLEMENT_ENGINE", {})
        defaults = cls()
        instructions = dict(DEFAULT_PAYMENT_INSTRUCTIONS)
        instructions.update(conf.get("PAYMENT_INSTRUCTIONS", {}))
        return cls(
            tax_rate_percent=Decimal(
                str(conf.get("TAX_RATE_PERCENT", defaults.tax_rate_percent))
            ),
            settlement_code_min=int(
                conf.get("SETTLEMENT_CODE_MIN", defaults.settlement_code_min)
            ),
            settlement_code_max=int(
                conf.get("SETTLEMENT_CODE_MAX", defaults.settlement_code_max)
            ),
            settlement_code_max_attempts=int(
                conf.get(
                    "SETTLEMENT_CODE_MAX_ATTEMPTS",
                    defaults.settlement_code_max_attempts,
                )
            ),
            fixed_duration_days=int(
                conf.get("FIXED_DURATION_DAYS", defaults.fixed_duration_days)
            ),
            min_following_days=int(
                conf.get("MIN_FOLLOWING_DAYS", defaults.min_following_days)
            ),
            addon_monthly_rates={
                key: int(value)
                for key, value in conf.get(
                    "ADDON_MONTHLY_RATES", defaults.addon_monthly_rates
                ).items()
            },
            addon_quantity_min=int(
                conf.get("ADDON_QUANTITY_MIN", defaults.addon_quantity_min)
            ),
            addon_quantity_max=int(
                conf.get("ADDON_QUANTITY_MAX", defaults.addon_quantity_max)
            ),
            subscription_expiry=timedelta(
                hours=int(conf.get("SUBSCRIPTION_EXPIRY_HOURS", 168))
            ),
            addon_expiry=timedelta(hours=int(conf.get("ADDON_EXPIRY_HOURS", 24))),
            currency=conf.get("CURRENCY", defaults.currency),
            payment_instructions=instructions,
        )
