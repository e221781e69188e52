# billing/models/__init__.py
"""
Billing models package.

Models are organized by domain:
- base.py: Abstract base classes
- choices.py: Enum choices
- user.py: User model
- subscription.py: SubscriptionPlan, Subscription
- voucher.py: Voucher, VoucherUsage
- affiliate.py: Affiliate, AffiliateVoucher, AffiliateReferral
- transaction.py: Transaction
- runtime_config.py: PaymentSettings, RateLimitSettings
"""

from .affiliate import Affiliate, AffiliateReferral, AffiliateVoucher
from .base import BaseModel, TimeStampedModel
from .choices import (
    AddonType,
    ApplicableType,
    DiscountType,
    DurationMode,
    PaymentStatus,
    PurchaseCategory,
    ReferralStatus,
    SubscriptionStatus,
)
from .runtime_config import PaymentSettings, RateLimitSettings
from .subscription import Subscription, SubscriptionPlan
from .transaction import Transaction
from .user import Role, User, UserManager
from .voucher import Voucher, VoucherUsage

__all__ = [
    # Affiliates
    "Affiliate",
    "AffiliateReferral",
    "AffiliateVoucher",
    # Base
    "BaseModel",
    "TimeStampedModel",
    # Choices
    "AddonType",
    "ApplicableType",
    "DiscountType",
    "DurationMode",
    "PaymentStatus",
    "PurchaseCategory",
    "ReferralStatus",
    "SubscriptionStatus",
    # Configuration
    "PaymentSettings",
    "RateLimitSettings",
    # Subscriptions
    "Subscription",
    "SubscriptionPlan",
    # Transactions
    "Transaction",
    # Users
    "Role",
    "User",
    "UserManager",
    # Vouchers
    "Voucher",
    "VoucherUsage",
]
