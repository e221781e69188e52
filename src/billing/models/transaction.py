# billing/models/transaction.py
"""
Transaction model: one row per purchase attempt awaiting manual bank transfer.
"""

from django.db import models
from django.db.models import Q

from .base import TimeStampedModel
from .choices import DurationMode, PaymentStatus, PurchaseCategory


class Transaction(TimeStampedModel):
    """
    A priced purchase attempt.

    Amounts are whole currency units and satisfy
    ``total_amount = (base_amount - discount_amount) + tax_amount + settlement_code``.
    While a transaction is pending its settlement code is unique among all
    pending transactions.
    """

    transaction_id = models.CharField(
        db_column="TransactionID",
        primary_key=True,
        max_length=64,
        help_text="Human-legible identifier, e.g. TXN-1700000000000-1A2B3C4D",
    )
    user = models.ForeignKey(
        "User",
        on_delete=models.PROTECT,
        db_column="UserID",
        related_name="transactions",
        help_text="Purchasing user",
    )
    plan_id = models.CharField(
        db_column="PlanID",
        max_length=64,
        help_text="Plan identifier or synthetic add-on product identifier",
    )
    category = models.CharField(
        db_column="Category",
        max_length=16,
        choices=PurchaseCategory.choices(),
        help_text="Purchase category",
    )
    quantity = models.IntegerField(
        db_column="Quantity",
        blank=True,
        null=True,
        help_text="Add-on quantity",
    )
    duration_mode = models.CharField(
        db_column="DurationMode",
        max_length=32,
        choices=DurationMode.choices(),
        blank=True,
        null=True,
        help_text="Add-on duration policy",
    )
    base_amount = models.BigIntegerField(
        db_column="BaseAmount",
        help_text="Amount before discount and tax",
    )
    discount_amount = models.BigIntegerField(
        db_column="DiscountAmount",
        blank=True,
        null=True,
        help_text="Discount applied (empty when none)",
    )
    tax_amount = models.BigIntegerField(
        db_column="TaxAmount",
        help_text="Tax on the discounted base",
    )
    settlement_code = models.IntegerField(
        db_column="SettlementCode",
        help_text="Random code added to the total for transfer reconciliation",
    )
    total_amount = models.BigIntegerField(
        db_column="TotalAmount",
        help_text="Amount the user must transfer",
    )
    voucher_code = models.CharField(
        db_column="VoucherCode",
        max_length=50,
        blank=True,
        null=True,
        help_text="Voucher code applied to this transaction",
    )
    payment_method = models.CharField(
        db_column="PaymentMethod",
        max_length=20,
        default="manual",
        help_text="Payment method (manual bank transfer)",
    )
    payment_status = models.CharField(
        db_column="PaymentStatus",
        max_length=24,
        choices=PaymentStatus.choices(),
        default=PaymentStatus.PENDING.value,
        help_text="Payment lifecycle status",
    )
    effective_start = models.DateTimeField(
        db_column="EffectiveStart",
        help_text="Start of the purchased period",
    )
    effective_end = models.DateTimeField(
        db_column="EffectiveEnd",
        blank=True,
        null=True,
        help_text="End of the purchased period",
    )
    expires_at = models.DateTimeField(
        db_column="ExpiresAt",
        blank=True,
        null=True,
        help_text="When the unpaid transaction expires",
    )

    class Meta:
        managed = True
        db_table = "Transactions"
        verbose_name = "Transaction"
        verbose_name_plural = "Transactions"
        indexes = [
            models.Index(fields=["user", "payment_status"], name="transactions_user_status_idx"),
            models.Index(fields=["payment_status", "expires_at"], name="transactions_status_expiry_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["settlement_code"],
                condition=Q(payment_status="pending"),
                name="uniq_pending_settlement_code",
            ),
        ]
        ordering = ["-created_at"]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.transaction_id} ({self.payment_status})"
