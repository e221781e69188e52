# billing/services/pricing/errors.py
"""
Pricing error taxonomy.

Rejections (PricingRejection subclasses) are raised before anything is
written. SettlementCodeExhausted and PersistenceFailure are fatal and also
leave no partial state. Failures of the bookkeeping steps that follow a
committed transaction are not exceptions: they are collected as
BookkeepingWarning records and logged.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


class PricingError(Exception):
    """Base exception for the pricing engine."""

    code = "PRICING_ERROR"
    default_message = "Unable to price this purchase"
    http_status = 400

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class PricingRejection(PricingError):
    """Input or state makes the purchase impossible; nothing was written."""


class InvalidInput(PricingRejection):
    code = "INVALID_INPUT"
    default_message = "Invalid purchase request"


class PlanUnavailable(InvalidInput):
    code = "PLAN_UNAVAILABLE"
    default_message = "Plan not found or inactive"


class VoucherNotFound(PricingRejection):
    code = "VOUCHER_NOT_FOUND"
    default_message = "Voucher code not found"


class VoucherInactive(PricingRejection):
    code = "VOUCHER_INACTIVE"
    default_message = "Voucher is not active"


class VoucherExpired(PricingRejection):
    code = "VOUCHER_EXPIRED"
    default_message = "Voucher has expired"


class VoucherNotYetValid(PricingRejection):
    code = "VOUCHER_NOT_YET_VALID"
    default_message = "Voucher is not valid yet"


class VoucherPlanMismatch(PricingRejection):
    code = "VOUCHER_PLAN_MISMATCH"
    default_message = "Voucher is not valid for this plan"


class VoucherBelowMinimumPurchase(PricingRejection):
    code = "VOUCHER_BELOW_MINIMUM_PURCHASE"
    default_message = "Purchase amount is below the voucher minimum"


class VoucherWrongApplicableType(PricingRejection):
    code = "VOUCHER_WRONG_APPLICABLE_TYPE"
    default_message = "Voucher cannot be used for this type of purchase"


class VoucherUsageLimitReached(PricingRejection):
    code = "VOUCHER_USAGE_LIMIT_REACHED"
    default_message = "Voucher usage limit has been reached"


class SubscriptionRequired(PricingRejection):
    code = "SUBSCRIPTION_REQUIRED"
    default_message = "An active subscription is required for this purchase"


class SubscriptionExpiringTooSoon(PricingRejection):
    code = "SUBSCRIPTION_EXPIRING_TOO_SOON"
    default_message = "Subscription is expiring too soon for this duration mode"


class SettlementCodeExhausted(PricingError):
    code = "SETTLEMENT_CODE_EXHAUSTED"
    default_message = "Could not allocate a unique settlement code, please retry"
    http_status = 503


class PersistenceFailure(PricingError):
    code = "PERSISTENCE_FAILURE"
    default_message = "The transaction could not be recorded"
    http_status = 500


@dataclass
class BookkeepingWarning:
    """A non-fatal failure of a side-ledger write after the transaction was saved."""

    step: str
    transaction_id: str
    error: str
    voucher_code: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
