# billing/services/pricing/vouchers.py
"""
Voucher resolution.

A code is looked up among affiliate vouchers first and then among generic
vouchers. Affiliate vouchers only need to be active. Generic vouchers are
validated in a fixed order so that a given voucher, context and instant always
yield the same rejection.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from billing.models.choices import ApplicableType, PurchaseCategory

from .config import PricingConfig
from .errors import (
    InvalidInput,
    VoucherBelowMinimumPurchase,
    VoucherExpired,
    VoucherInactive,
    VoucherNotFound,
    VoucherNotYetValid,
    VoucherPlanMismatch,
    VoucherUsageLimitReached,
    VoucherWrongApplicableType,
)
from .money import compute_discount

logger = logging.getLogger(__name__)

AFFILIATE = "affiliate"
GENERIC = "generic"


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


@dataclass(frozen=True)
class PurchaseContext:
    """What a voucher is being applied to."""

    base_amount: int
    plan_id: str
    category: str
    now: datetime
    # Plans compare the minimum purchase against max(price, original_price)
    minimum_purchase_basis: int | None = None

    @property
    def minimum_basis(self) -> int:
        if self.minimum_purchase_basis is None:
            return self.base_amount
        return self.minimum_purchase_basis


@dataclass(frozen=True)
class DiscountDescriptor:
    """Outcome of a successful resolution; ``source`` is None when no voucher applies."""

    code: str | None = None
    source: str | None = None
    discount_type: str | None = None
    discount_value: Decimal | None = None
    discount_amount: int = 0
    max_discount: int | None = None
    voucher_id: int | None = None
    affiliate_voucher_id: int | None = None
    affiliate_id: int | None = None
    affiliate_code: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def applied(self) -> bool:
        return self.source is not None

    @property
    def is_affiliate(self) -> bool:
        return self.source == AFFILIATE

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "source": self.source,
            "discount_type": self.discount_type,
            "discount_value": str(self.discount_value)
            if self.discount_value is not None
            else None,
            "discount_amount": self.discount_amount,
            "max_discount": self.max_discount,
        }


NO_DISCOUNT = DiscountDescriptor()


@dataclass(frozen=True)
class AffiliateOffer:
    """Active affiliate voucher found for a referral link."""

    voucher_code: str
    discount_type: str
    discount_value: Decimal
    affiliate_code: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "voucher_code": self.voucher_code,
            "discount_type": self.discount_type,
            "discount_value": str(self.discount_value),
            "affiliate_code": self.affiliate_code,
        }


def referral_base_code(ref: str) -> str:
    """Strip a channel tag: ``PARTNER01_IG`` -> ``PARTNER01``."""
    return ref.split("_", 1)[0]


class VoucherResolver:
    """Resolves a voucher code against a purchase context. Read-only."""

    def __init__(self, config: PricingConfig | None = None):
        self.config = config or PricingConfig.from_settings()

    def resolve(self, code: str | None, context: PurchaseContext) -> DiscountDescriptor:
        """
        Return the discount for ``code`` or raise a PricingRejection subclass.

        An empty code resolves to NO_DISCOUNT.
        """
        from billing.models import AffiliateVoucher, Voucher

        normalized = normalize_code(code)
        if not normalized:
            return NO_DISCOUNT

        affiliate_voucher = (
            AffiliateVoucher.objects.not_deleted()
            .select_related("affiliate")
            .filter(code__iexact=normalized)
            .first()
        )
        if affiliate_voucher is not None:
            return self._resolve_affiliate(affiliate_voucher, context)

        voucher = Voucher.objects.not_deleted().filter(code__iexact=normalized).first()
        if voucher is None:
            logger.info(f"Voucher {normalized} not found")
            raise VoucherNotFound(details={"code": normalized})

        self.validate_generic(voucher, context)
        amount = compute_discount(
            context.base_amount,
            voucher.discount_type,
            voucher.discount_value,
            voucher.max_discount,
        )
        return DiscountDescriptor(
            code=voucher.code,
            source=GENERIC,
            discount_type=voucher.discount_type,
            discount_value=voucher.discount_value,
            discount_amount=amount,
            max_discount=voucher.max_discount,
            voucher_id=voucher.voucher_id,
        )

    def lookup_affiliate_voucher(self, ref: str | None) -> AffiliateOffer:
        """
        Find the active voucher of the affiliate behind a referral code.

        The code may carry a channel suffix (``PARTNER01_TIKTOK``); an exact
        affiliate code match wins over a prefix match on the base code.
        Raises VoucherNotFound when there is no such affiliate or it has no
        active voucher.
        """
        from billing.models import Affiliate

        ref = (ref or "").strip()
        if not ref:
            raise InvalidInput("Referral code is required", details={"field": "ref"})

        affiliates = Affiliate.objects.not_deleted()
        affiliate = affiliates.filter(affiliate_code__iexact=ref).first()
        if affiliate is None:
            affiliate = (
                affiliates.filter(affiliate_code__istartswith=referral_base_code(ref))
                .order_by("affiliate_code")
                .first()
            )
        if affiliate is None:
            logger.info(f"No affiliate found for referral {ref}")
            raise VoucherNotFound("Affiliate not found", details={"ref": ref})

        voucher = affiliate.vouchers.live().order_by("-created_at").first()
        if voucher is None:
            logger.info(f"No active voucher for affiliate {affiliate.affiliate_code}")
            raise VoucherNotFound(
                "No active voucher for this affiliate",
                details={"ref": ref, "affiliate_code": affiliate.affiliate_code},
            )

        return AffiliateOffer(
            voucher_code=voucher.code,
            discount_type=voucher.discount_type,
            discount_value=voucher.discount_value,
            affiliate_code=affiliate.affiliate_code,
        )

    def _resolve_affiliate(self, affiliate_voucher, context: PurchaseContext) -> DiscountDescriptor:
        if affiliate_voucher.is_active != 1:
            raise VoucherInactive(details={"code": affiliate_voucher.code})

        amount = compute_discount(
            context.base_amount,
            affiliate_voucher.discount_type,
            affiliate_voucher.discount_value,
        )
        return DiscountDescriptor(
            code=affiliate_voucher.code,
            source=AFFILIATE,
            discount_type=affiliate_voucher.discount_type,
            discount_value=affiliate_voucher.discount_value,
            discount_amount=amount,
            affiliate_voucher_id=affiliate_voucher.affiliate_voucher_id,
            affiliate_id=affiliate_voucher.affiliate_id,
            affiliate_code=affiliate_voucher.affiliate.affiliate_code,
        )

    @staticmethod
    def validate_generic(voucher, context: PurchaseContext) -> None:
        """Raise the first failing rule for a generic voucher, in order."""
        details = {"code": voucher.code}

        if voucher.is_active != 1:
            raise VoucherInactive(details=details)

        if voucher.expiry_date is not None and voucher.expiry_date < context.now:
            raise VoucherExpired(
                details={**details, "expiry_date": voucher.expiry_date.isoformat()}
            )

        if voucher.start_date is not None and voucher.start_date > context.now:
            raise VoucherNotYetValid(
                details={**details, "start_date": voucher.start_date.isoformat()}
            )

        if (
            context.category == PurchaseCategory.SUBSCRIPTION.value
            and voucher.applicable_plans
            and context.plan_id not in voucher.applicable_plans
        ):
            raise VoucherPlanMismatch(details={**details, "plan_id": context.plan_id})

        if voucher.min_purchase is not None and context.minimum_basis < voucher.min_purchase:
            raise VoucherBelowMinimumPurchase(
                f"Minimum purchase for this voucher is {voucher.min_purchase}",
                details={**details, "min_purchase": voucher.min_purchase},
            )

        if (
            voucher.applicable_type != ApplicableType.ALL.value
            and voucher.applicable_type != context.category
        ):
            raise VoucherWrongApplicableType(
                f"Voucher is only valid for {voucher.applicable_type} purchases",
                details={**details, "applicable_type": voucher.applicable_type},
            )

        if voucher.usage_exhausted:
            raise VoucherUsageLimitReached(details=details)
