# billing/models/choices.py
"""
Choice field definitions for billing enums.

Values are lower-case snake strings; they are stored as-is and are part of
the public API payloads.
"""

from collections.abc import Sequence as SequenceType
from enum import Enum


class ChoiceEnum(str, Enum):
    """String enum with Django-style choices helpers."""

    @classmethod
    def choices(cls) -> SequenceType[tuple[str, str]]:
        return [(item.value, item.name.replace("_", " ").title()) for item in cls]

    @classmethod
    def values(cls) -> SequenceType[str]:
        return [item.value for item in cls]


class DiscountType(ChoiceEnum):
    """Discount kinds supported by vouchers."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class ApplicableType(ChoiceEnum):
    """Which purchase category a generic voucher may be used for."""

    ALL = "all"
    SUBSCRIPTION = "subscription"
    ADDON = "addon"


class PurchaseCategory(ChoiceEnum):
    """Category of a purchase attempt."""

    SUBSCRIPTION = "subscription"
    ADDON = "addon"


class DurationMode(ChoiceEnum):
    """Billing duration policies for add-on purchases."""

    FIXED_30_DAYS = "fixed_30_days"
    FOLLOWING_SUBSCRIPTION = "following_subscription"


class PaymentStatus(ChoiceEnum):
    """Lifecycle status of a transaction."""

    PENDING = "pending"
    WAITING_CONFIRMATION = "waiting_confirmation"
    PAID = "paid"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @classmethod
    def open_statuses(cls) -> list[str]:
        """Statuses that still expect a payment and can expire."""
        return [cls.PENDING.value, cls.WAITING_CONFIRMATION.value]


class SubscriptionStatus(ChoiceEnum):
    """Status options for subscriptions."""

    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class ReferralStatus(ChoiceEnum):
    """Status of an affiliate referral."""

    PENDING = "pending"
    CONVERTED = "converted"


class AddonType(ChoiceEnum):
    """Purchasable add-on products."""

    EXTRA_ACCOUNTS = "extra_accounts"
