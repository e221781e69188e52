# billing/services/pricing/assembler.py
"""
Transaction assembly.

Orchestrates a purchase end to end:

1. Resolve the base amount (plan price, or DurationPricer output for add-ons).
2. Resolve the voucher; a rejection ends the attempt before any write.
3. Claim the voucher and insert the Transaction in one database transaction.
   The settlement code is retried on unique-constraint conflicts, within the
   generator's attempt budget. This is the only fatal write.
4. Best-effort bookkeeping, each step in its own savepoint: the voucher usage
   ledger row and, for affiliate vouchers, the referral attribution. Failures
   become BookkeepingWarning entries that are logged, never raised.
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from django.db import DatabaseError, IntegrityError
from django.db import transaction as db_transaction
from django.utils import timezone

from billing.models.choices import PaymentStatus, PurchaseCategory, ReferralStatus
from billingutils.logging import get_logger

from .config import PricingConfig
from .duration import DurationPricer, DurationQuote
from .errors import (
    BookkeepingWarning,
    InvalidInput,
    PersistenceFailure,
    PlanUnavailable,
    PricingError,
    PricingRejection,
    VoucherInactive,
    VoucherUsageLimitReached,
)
from .money import compute_tax, compute_total
from .settlement_code import SettlementCodeGenerator
from .vouchers import (
    AFFILIATE,
    GENERIC,
    NO_DISCOUNT,
    DiscountDescriptor,
    PurchaseContext,
    VoucherResolver,
    normalize_code,
)

logger = get_logger(__name__)

TRANSACTION_ID_PREFIXES = {
    PurchaseCategory.SUBSCRIPTION.value: ("TXN", 8),
    PurchaseCategory.ADDON.value: ("ADDON", 6),
}


def new_transaction_id(category: str, now: datetime) -> str:
    """``TXN-<epoch ms>-<8 hex>`` for subscriptions, ``ADDON-<epoch ms>-<6 hex>`` for add-ons."""
    prefix, suffix_length = TRANSACTION_ID_PREFIXES[category]
    millis = int(now.timestamp() * 1000)
    return f"{prefix}-{millis}-{uuid.uuid4().hex[:suffix_length].upper()}"


@dataclass(frozen=True)
class PriceBreakdown:
    base_amount: int
    discount_amount: int
    tax_amount: int
    settlement_code: int
    total_amount: int

    @classmethod
    def compute(
        cls, base_amount: int, discount_amount: int, tax_rate_percent, settlement_code: int
    ) -> "PriceBreakdown":
        base_after_discount = max(0, base_amount - discount_amount)
        tax = compute_tax(base_after_discount, tax_rate_percent)
        return cls(
            base_amount=base_amount,
            discount_amount=discount_amount,
            tax_amount=tax,
            settlement_code=settlement_code,
            total_amount=compute_total(base_after_discount, tax, settlement_code),
        )

    def total_without_discount(self, tax_rate_percent) -> int:
        """What the payer would owe for the same code without the voucher."""
        return compute_total(
            self.base_amount,
            compute_tax(self.base_amount, tax_rate_percent),
            self.settlement_code,
        )


@dataclass
class PurchaseRequest:
    """A purchase intent from an already-authenticated user."""

    user: Any
    category: str
    plan_id: str | None = None
    addon_type: str | None = None
    quantity: int | None = None
    duration_mode: str | None = None
    voucher_code: str | None = None
    expiry_horizon: timedelta | None = None

    @classmethod
    def subscription(cls, user, plan_id: str, voucher_code: str | None = None, **kwargs):
        return cls(
            user=user,
            category=PurchaseCategory.SUBSCRIPTION.value,
            plan_id=plan_id,
            voucher_code=voucher_code,
            **kwargs,
        )

    @classmethod
    def addon(
        cls,
        user,
        addon_type: str,
        quantity: int,
        duration_mode: str,
        voucher_code: str | None = None,
        **kwargs,
    ):
        return cls(
            user=user,
            category=PurchaseCategory.ADDON.value,
            addon_type=addon_type,
            quantity=quantity,
            duration_mode=duration_mode,
            voucher_code=voucher_code,
            **kwargs,
        )


@dataclass
class PricingResult:
    """Outcome returned to the caller once the transaction is committed."""

    transaction_id: str
    category: str
    plan_id: str
    base_amount: int
    discount_amount: int
    tax_amount: int
    settlement_code: int
    total_amount: int
    applied_voucher_code: str | None
    effective_start: datetime
    effective_end: datetime | None
    payment_status: str
    expires_at: datetime
    payment_instructions: dict[str, Any]
    currency: str = "IDR"
    quantity: int | None = None
    unit_price: int | None = None
    billable_days: int | None = None
    duration_mode: str | None = None
    bookkeeping_warnings: list[BookkeepingWarning] = field(default_factory=list, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Serializable view for the caller; bookkeeping warnings are excluded."""
        return {
            "transaction_id": self.transaction_id,
            "category": self.category,
            "plan_id": self.plan_id,
            "base_amount": self.base_amount,
            "discount_amount": self.discount_amount,
            "tax_amount": self.tax_amount,
            "settlement_code": self.settlement_code,
            "total_amount": self.total_amount,
            "applied_voucher_code": self.applied_voucher_code,
            "effective_start": self.effective_start.isoformat(),
            "effective_end": self.effective_end.isoformat() if self.effective_end else None,
            "payment_status": self.payment_status,
            "expires_at": self.expires_at.isoformat(),
            "currency": self.currency,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "billable_days": self.billable_days,
            "duration_mode": self.duration_mode,
            "payment_instructions": self.payment_instructions,
        }


@dataclass
class _PricingInputs:
    base_amount: int
    plan_id: str
    context: PurchaseContext
    effective_start: datetime
    effective_end: datetime | None
    quote: DurationQuote | None = None


class TransactionAssembler:
    """Prices a purchase, records the transaction and its side ledgers."""

    def __init__(
        self,
        config: PricingConfig | None = None,
        resolver: VoucherResolver | None = None,
        duration_pricer: DurationPricer | None = None,
        code_generator: SettlementCodeGenerator | None = None,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.config = config or PricingConfig.from_settings()
        self.resolver = resolver or VoucherResolver(self.config)
        self.duration_pricer = duration_pricer or DurationPricer(self.config)
        self.code_generator = code_generator or SettlementCodeGenerator(self.config)
        self.clock = clock

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def create_subscription_transaction(
        self, user, plan_id: str, voucher_code: str | None = None, **kwargs
    ) -> PricingResult:
        return self.create_transaction(
            PurchaseRequest.subscription(user, plan_id, voucher_code, **kwargs)
        )

    def create_addon_transaction(
        self,
        user,
        addon_type: str,
        quantity: int,
        duration_mode: str,
        voucher_code: str | None = None,
        **kwargs,
    ) -> PricingResult:
        return self.create_transaction(
            PurchaseRequest.addon(
                user, addon_type, quantity, duration_mode, voucher_code, **kwargs
            )
        )

    def create_transaction(self, request: PurchaseRequest) -> PricingResult:
        """
        Price and record a purchase.

        Raises a PricingRejection subclass, SettlementCodeExhausted or
        PersistenceFailure; in each case nothing has been written.
        """
        now = self.clock()
        try:
            payment_settings = self._payment_settings()
            inputs = self._resolve_inputs(request, now)
            discount = self._resolve_discount(request, inputs.context, payment_settings)
            record, breakdown = self._persist(request, inputs, discount, now)
        except PricingError:
            raise
        except DatabaseError as exc:
            logger.error(
                "transaction_persist_failed",
                user_id=request.user.pk,
                category=request.category,
                error=str(exc),
            )
            raise PersistenceFailure(details={"reason": str(exc)}) from exc

        logger.info(
            "transaction_created",
            transaction_id=record.transaction_id,
            user_id=request.user.pk,
            category=request.category,
            total_amount=breakdown.total_amount,
            voucher_code=discount.code,
        )

        warnings: list[BookkeepingWarning] = []
        if discount.applied:
            warnings.extend(self._record_voucher_usage(record, discount, breakdown))
        if discount.is_affiliate:
            warnings.extend(self._record_affiliate_referral(record, discount, now))
        for warning in warnings:
            logger.warning("bookkeeping_failed", **warning.to_dict())

        return PricingResult(
            transaction_id=record.transaction_id,
            category=request.category,
            plan_id=inputs.plan_id,
            base_amount=breakdown.base_amount,
            discount_amount=breakdown.discount_amount,
            tax_amount=breakdown.tax_amount,
            settlement_code=breakdown.settlement_code,
            total_amount=breakdown.total_amount,
            applied_voucher_code=discount.code,
            effective_start=inputs.effective_start,
            effective_end=inputs.effective_end,
            payment_status=record.payment_status,
            expires_at=record.expires_at,
            payment_instructions=self._payment_instructions(record, payment_settings),
            currency=self.config.currency,
            quantity=inputs.quote.quantity if inputs.quote else None,
            unit_price=inputs.quote.unit_price if inputs.quote else None,
            billable_days=inputs.quote.billable_days if inputs.quote else None,
            duration_mode=inputs.quote.mode if inputs.quote else None,
            bookkeeping_warnings=warnings,
        )

    def quote_addon(
        self,
        user,
        addon_type: str,
        quantity: int,
        duration_mode: str,
        voucher_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Price an add-on without recording anything.

        A voucher rejection does not fail the quote; it is reported under
        ``voucher_error`` and no discount is applied.
        """
        now = self.clock()
        request = PurchaseRequest.addon(user, addon_type, quantity, duration_mode, voucher_code)
        inputs = self._resolve_inputs(request, now)

        voucher_error = None
        try:
            discount = self.resolver.resolve(voucher_code, inputs.context)
        except PricingRejection as exc:
            discount = NO_DISCOUNT
            voucher_error = exc.to_dict()

        breakdown = PriceBreakdown.compute(
            inputs.base_amount,
            discount.discount_amount,
            self.config.tax_rate_percent,
            settlement_code=0,
        )
        return {
            **inputs.quote.to_dict(),
            "plan_id": inputs.plan_id,
            "base_amount": breakdown.base_amount,
            "discount_amount": breakdown.discount_amount,
            "tax_amount": breakdown.tax_amount,
            "total_before_settlement_code": breakdown.total_amount,
            "tax_rate_percent": str(self.config.tax_rate_percent),
            "currency": self.config.currency,
            "voucher": discount.to_dict() if discount.applied else None,
            "voucher_error": voucher_error,
        }

    # ------------------------------------------------------------------
    # Pricing inputs
    # ------------------------------------------------------------------

    def _resolve_inputs(self, request: PurchaseRequest, now: datetime) -> _PricingInputs:
        if request.category == PurchaseCategory.SUBSCRIPTION.value:
            return self._subscription_inputs(request, now)
        if request.category == PurchaseCategory.ADDON.value:
            return self._addon_inputs(request, now)
        raise InvalidInput(
            f"Unknown purchase category: {request.category}",
            details={"category": request.category},
        )

    def _subscription_inputs(self, request: PurchaseRequest, now: datetime) -> _PricingInputs:
        from billing.models import SubscriptionPlan

        if not request.plan_id:
            raise InvalidInput("plan_id is required", details={"field": "plan_id"})

        plan = SubscriptionPlan.objects.live().filter(plan_id=request.plan_id).first()
        if plan is None:
            raise PlanUnavailable(details={"plan_id": request.plan_id})
        if plan.price <= 0:
            raise InvalidInput(
                "Free plans do not require a transaction",
                details={"plan_id": plan.plan_id},
            )

        return _PricingInputs(
            base_amount=plan.price,
            plan_id=plan.plan_id,
            context=PurchaseContext(
                base_amount=plan.price,
                plan_id=plan.plan_id,
                category=request.category,
                now=now,
                minimum_purchase_basis=plan.minimum_purchase_basis,
            ),
            effective_start=now,
            effective_end=now + timedelta(days=plan.duration_days),
        )

    def _addon_inputs(self, request: PurchaseRequest, now: datetime) -> _PricingInputs:
        quote = self.duration_pricer.price(
            request.user,
            addon_type=request.addon_type,
            quantity=request.quantity,
            mode=request.duration_mode,
            now=now,
        )
        return _PricingInputs(
            base_amount=quote.subtotal,
            plan_id=quote.product_id,
            context=PurchaseContext(
                base_amount=quote.subtotal,
                plan_id=quote.product_id,
                category=request.category,
                now=now,
            ),
            effective_start=quote.effective_start,
            effective_end=quote.effective_end,
            quote=quote,
        )

    def _resolve_discount(
        self, request: PurchaseRequest, context: PurchaseContext, payment_settings
    ) -> DiscountDescriptor:
        if normalize_code(request.voucher_code):
            return self.resolver.resolve(request.voucher_code, context)

        default_code = self._default_voucher_code(request, payment_settings)
        if not default_code:
            return NO_DISCOUNT
        try:
            return self.resolver.resolve(default_code, context)
        except PricingRejection as exc:
            logger.info("default_voucher_skipped", code=default_code, reason=exc.code)
            return NO_DISCOUNT

    @staticmethod
    def _default_voucher_code(request: PurchaseRequest, payment_settings) -> str | None:
        if request.category != PurchaseCategory.SUBSCRIPTION.value:
            return None
        if payment_settings is None or not payment_settings.default_voucher_enabled:
            return None
        voucher = payment_settings.default_voucher
        if voucher is None or not voucher.is_live:
            return None
        return voucher.code

    # ------------------------------------------------------------------
    # Primary write
    # ------------------------------------------------------------------

    def _persist(
        self,
        request: PurchaseRequest,
        inputs: _PricingInputs,
        discount: DiscountDescriptor,
        now: datetime,
    ):
        from billing.models import Transaction

        expiry_horizon = request.expiry_horizon or self._default_expiry(request.category)

        with db_transaction.atomic():
            self._claim_voucher(discount)

            for code in self.code_generator.candidates():
                breakdown = PriceBreakdown.compute(
                    inputs.base_amount,
                    discount.discount_amount,
                    self.config.tax_rate_percent,
                    code,
                )
                transaction_id = new_transaction_id(request.category, now)
                try:
                    with db_transaction.atomic():
                        record = Transaction.objects.create(
                            transaction_id=transaction_id,
                            user=request.user,
                            plan_id=inputs.plan_id,
                            category=request.category,
                            quantity=inputs.quote.quantity if inputs.quote else None,
                            duration_mode=inputs.quote.mode if inputs.quote else None,
                            base_amount=breakdown.base_amount,
                            discount_amount=breakdown.discount_amount or None,
                            tax_amount=breakdown.tax_amount,
                            settlement_code=breakdown.settlement_code,
                            total_amount=breakdown.total_amount,
                            voucher_code=discount.code,
                            payment_status=PaymentStatus.PENDING.value,
                            effective_start=inputs.effective_start,
                            effective_end=inputs.effective_end,
                            expires_at=now + expiry_horizon,
                        )
                except IntegrityError as exc:
                    if not self._is_insert_conflict(transaction_id, code):
                        raise
                    logger.info(
                        "transaction_insert_conflict",
                        transaction_id=transaction_id,
                        settlement_code=code,
                        error=str(exc),
                    )
                    continue
                return record, breakdown

            raise self.code_generator.exhausted()

    @staticmethod
    def _is_insert_conflict(transaction_id: str, code: int) -> bool:
        """True when a pending row already holds the code or the id."""
        from billing.models import Transaction

        return (
            Transaction.objects.filter(
                settlement_code=code, payment_status=PaymentStatus.PENDING.value
            ).exists()
            or Transaction.objects.filter(pk=transaction_id).exists()
        )

    def _default_expiry(self, category: str) -> timedelta:
        if category == PurchaseCategory.ADDON.value:
            return self.config.addon_expiry
        return self.config.subscription_expiry

    @staticmethod
    def _claim_voucher(discount: DiscountDescriptor) -> None:
        """Take a usage slot atomically; zero rows updated is a late rejection."""
        from billing.models import AffiliateVoucher, Voucher

        if discount.source == GENERIC:
            if Voucher.claim(discount.voucher_id):
                return
            voucher = Voucher.objects.filter(pk=discount.voucher_id).first()
            if voucher is None or not voucher.is_live:
                raise VoucherInactive(details={"code": discount.code})
            raise VoucherUsageLimitReached(details={"code": discount.code})

        if discount.source == AFFILIATE and not AffiliateVoucher.claim(
            discount.affiliate_voucher_id
        ):
            raise VoucherInactive(details={"code": discount.code})

    # ------------------------------------------------------------------
    # Best-effort bookkeeping
    # ------------------------------------------------------------------

    def _record_voucher_usage(
        self, record, discount: DiscountDescriptor, breakdown: PriceBreakdown
    ) -> list[BookkeepingWarning]:
        from billing.models import VoucherUsage

        try:
            with db_transaction.atomic():
                VoucherUsage.objects.create(
                    voucher_id=discount.voucher_id,
                    affiliate_voucher_id=discount.affiliate_voucher_id,
                    voucher_code=discount.code,
                    transaction=record,
                    user_id=record.user_id,
                    discount_type=discount.discount_type,
                    discount_value=discount.discount_value,
                    discount_amount=breakdown.discount_amount,
                    plan_id=record.plan_id,
                    base_amount=breakdown.base_amount,
                    total_before_discount=breakdown.total_without_discount(
                        self.config.tax_rate_percent
                    ),
                    total_after_discount=breakdown.total_amount,
                )
        except Exception as exc:
            return [
                BookkeepingWarning(
                    step="voucher_usage",
                    transaction_id=record.transaction_id,
                    voucher_code=discount.code,
                    error=f"{type(exc).__name__}: {exc}",
                )
            ]
        return []

    @staticmethod
    def _record_affiliate_referral(
        record, discount: DiscountDescriptor, now: datetime
    ) -> list[BookkeepingWarning]:
        from billing.models import AffiliateReferral, User

        try:
            with db_transaction.atomic():
                _, created = AffiliateReferral.objects.get_or_create(
                    affiliate_id=discount.affiliate_id,
                    user_id=record.user_id,
                    defaults={
                        "referral_code": discount.code,
                        "signup_date": now,
                        "status": ReferralStatus.CONVERTED.value,
                    },
                )
                if created:
                    User.objects.filter(
                        pk=record.user_id, referred_by_affiliate__isnull=True
                    ).update(
                        referred_by_affiliate=discount.affiliate_code,
                        referral_date=now,
                    )
        except Exception as exc:
            return [
                BookkeepingWarning(
                    step="affiliate_referral",
                    transaction_id=record.transaction_id,
                    voucher_code=discount.code,
                    error=f"{type(exc).__name__}: {exc}",
                    context={"affiliate_id": discount.affiliate_id},
                )
            ]
        return []

    # ------------------------------------------------------------------
    # Payment instructions
    # ------------------------------------------------------------------

    @staticmethod
    def _payment_settings():
        from billing.models import PaymentSettings

        return PaymentSettings.current()

    def _payment_instructions(self, record, payment_settings) -> dict[str, Any]:
        instructions = dict(self.config.payment_instructions)
        if payment_settings is not None:
            instructions.update(
                bank_name=payment_settings.bank_name,
                account_number=payment_settings.account_number,
                account_name=payment_settings.account_name,
            )
        instructions.update(
            amount=record.total_amount,
            currency=self.config.currency,
            reference=record.transaction_id,
            note=f"Transfer with reference: {record.transaction_id}",
            expires_at=record.expires_at.isoformat(),
        )
        return instructions
