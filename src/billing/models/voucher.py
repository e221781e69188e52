# billing/models/voucher.py
"""
Generic voucher and voucher usage ledger models.

Provides:
- Voucher: Promotional discount code with validity rules and a usage counter
- VoucherUsage: Append-only audit row for each voucher applied to a transaction
"""

from django.db import models
from django.db.models import F, Q

from .base import BaseModel, TimeStampedModel
from .choices import ApplicableType, DiscountType


class Voucher(BaseModel):
    """
    Promotional (generic) voucher.

    Validation order used at purchase time: active flag, expiry, start date,
    applicable plans, minimum purchase, applicable type, usage limit.
    """

    voucher_id = models.AutoField(
        db_column="VoucherID",
        primary_key=True,
        help_text="Unique identifier for the voucher",
    )
    code = models.CharField(
        db_column="Code",
        max_length=50,
        unique=True,
        help_text="Voucher code, stored upper-case and matched case-insensitively",
    )
    name = models.CharField(
        db_column="Name",
        max_length=255,
        blank=True,
        default="",
        help_text="Internal campaign name",
    )
    discount_type = models.CharField(
        db_column="DiscountType",
        max_length=12,
        choices=DiscountType.choices(),
        help_text="Type of discount: percentage or fixed amount",
    )
    discount_value = models.DecimalField(
        db_column="DiscountValue",
        max_digits=12,
        decimal_places=2,
        help_text="Percentage (0-100) or fixed amount in whole currency units",
    )
    min_purchase = models.BigIntegerField(
        db_column="MinPurchase",
        blank=True,
        null=True,
        help_text="Minimum purchase amount required to use this voucher",
    )
    max_discount = models.BigIntegerField(
        db_column="MaxDiscount",
        blank=True,
        null=True,
        help_text="Cap on the discount amount for percentage vouchers",
    )
    start_date = models.DateTimeField(
        db_column="StartDate",
        blank=True,
        null=True,
        help_text="When the voucher becomes valid (empty = immediately)",
    )
    expiry_date = models.DateTimeField(
        db_column="ExpiryDate",
        blank=True,
        null=True,
        help_text="When the voucher expires (empty = never)",
    )
    applicable_plans = models.JSONField(
        db_column="ApplicablePlans",
        default=list,
        blank=True,
        help_text="Plan identifiers this voucher applies to (empty = all plans)",
    )
    applicable_type = models.CharField(
        db_column="ApplicableType",
        max_length=16,
        choices=ApplicableType.choices(),
        default=ApplicableType.ALL.value,
        help_text="Purchase category this voucher can be used for",
    )
    max_total_usage = models.IntegerField(
        db_column="MaxTotalUsage",
        blank=True,
        null=True,
        help_text="Maximum number of uses across all users (empty = unlimited)",
    )
    usage_count = models.IntegerField(
        db_column="UsageCount",
        default=0,
        help_text="Number of transactions that have claimed this voucher",
    )

    class Meta:
        managed = True
        db_table = "Vouchers"
        verbose_name = "Voucher"
        verbose_name_plural = "Vouchers"
        indexes = [
            models.Index(fields=["code", "is_active"], name="vouchers_code_active_idx"),
        ]
        ordering = ["-created_at"]
        app_label = "billing"

    def __str__(self) -> str:
        if self.discount_type == DiscountType.PERCENTAGE.value:
            return f"{self.code}: {self.discount_value}% off"
        return f"{self.code}: {self.discount_value} off"

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    @property
    def usage_exhausted(self) -> bool:
        return self.max_total_usage is not None and self.usage_count >= self.max_total_usage

    @classmethod
    def claim(cls, voucher_id: int) -> bool:
        """
        Atomically take one usage slot.

        Returns False when the voucher was deactivated or its usage limit was
        reached after it was validated.
        """
        updated = (
            cls.objects.live()
            .filter(pk=voucher_id)
            .filter(Q(max_total_usage__isnull=True) | Q(usage_count__lt=F("max_total_usage")))
            .update(usage_count=F("usage_count") + 1)
        )
        return updated == 1


class VoucherUsage(TimeStampedModel):
    """
    Ledger row recording one voucher application.

    Exactly one of ``voucher`` / ``affiliate_voucher`` is set. At most one row
    exists per transaction.
    """

    usage_id = models.AutoField(
        db_column="UsageID",
        primary_key=True,
        help_text="Unique identifier for the usage record",
    )
    voucher = models.ForeignKey(
        Voucher,
        on_delete=models.PROTECT,
        db_column="VoucherID",
        blank=True,
        null=True,
        related_name="usages",
        help_text="Generic voucher that was applied",
    )
    affiliate_voucher = models.ForeignKey(
        "AffiliateVoucher",
        on_delete=models.PROTECT,
        db_column="AffiliateVoucherID",
        blank=True,
        null=True,
        related_name="usages",
        help_text="Affiliate voucher that was applied",
    )
    voucher_code = models.CharField(
        db_column="VoucherCode",
        max_length=50,
        help_text="Code as applied",
    )
    transaction = models.OneToOneField(
        "Transaction",
        on_delete=models.CASCADE,
        db_column="TransactionID",
        related_name="voucher_usage",
        help_text="Transaction the voucher was applied to",
    )
    user = models.ForeignKey(
        "User",
        on_delete=models.CASCADE,
        db_column="UserID",
        related_name="voucher_usages",
        help_text="Purchasing user",
    )
    discount_type = models.CharField(
        db_column="DiscountType",
        max_length=12,
        choices=DiscountType.choices(),
        help_text="Discount kind at time of use",
    )
    discount_value = models.DecimalField(
        db_column="DiscountValue",
        max_digits=12,
        decimal_places=2,
        help_text="Discount value at time of use",
    )
    discount_amount = models.BigIntegerField(
        db_column="DiscountAmount",
        help_text="Discount granted, in whole currency units",
    )
    plan_id = models.CharField(
        db_column="PlanID",
        max_length=64,
        help_text="Plan or add-on product identifier",
    )
    base_amount = models.BigIntegerField(
        db_column="BaseAmount",
        help_text="Base amount of the transaction",
    )
    total_before_discount = models.BigIntegerField(
        db_column="TotalBeforeDiscount",
        help_text="Total the user would have paid without the voucher",
    )
    total_after_discount = models.BigIntegerField(
        db_column="TotalAfterDiscount",
        help_text="Total the user pays with the voucher",
    )

    class Meta:
        managed = True
        db_table = "VoucherUsages"
        verbose_name = "Voucher Usage"
        verbose_name_plural = "Voucher Usages"
        indexes = [
            models.Index(fields=["voucher_code"], name="voucher_usages_code_idx"),
        ]
        ordering = ["-created_at"]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.voucher_code} -> {self.transaction_id}"
