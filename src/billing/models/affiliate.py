# billing/models/affiliate.py
"""
Affiliate models.

Provides:
- Affiliate: Referral partner
- AffiliateVoucher: Personal discount code owned by an affiliate
- AffiliateReferral: First-purchase attribution of a user to an affiliate
"""

from django.db import models
from django.db.models import F

from .base import BaseModel, TimeStampedModel
from .choices import DiscountType, ReferralStatus


class Affiliate(BaseModel):
    """Referral partner that earns commission on attributed purchases."""

    affiliate_id = models.AutoField(
        db_column="AffiliateID",
        primary_key=True,
        help_text="Unique identifier for the affiliate",
    )
    name = models.CharField(
        db_column="Name",
        max_length=255,
        help_text="Affiliate display name",
    )
    email = models.CharField(
        db_column="Email",
        max_length=255,
        blank=True,
        default="",
        help_text="Affiliate contact email",
    )
    affiliate_code = models.CharField(
        db_column="AffiliateCode",
        max_length=50,
        unique=True,
        help_text="Affiliate's referral code",
    )

    class Meta:
        managed = True
        db_table = "Affiliates"
        verbose_name = "Affiliate"
        verbose_name_plural = "Affiliates"
        ordering = ["name"]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.name} ({self.affiliate_code})"


class AffiliateVoucher(BaseModel):
    """
    Personal voucher owned by an affiliate.

    No date window, minimum purchase, plan restriction or discount cap.
    """

    affiliate_voucher_id = models.AutoField(
        db_column="AffiliateVoucherID",
        primary_key=True,
        help_text="Unique identifier for the affiliate voucher",
    )
    affiliate = models.ForeignKey(
        Affiliate,
        on_delete=models.CASCADE,
        db_column="AffiliateID",
        related_name="vouchers",
        help_text="Affiliate that owns this voucher",
    )
    code = models.CharField(
        db_column="Code",
        max_length=50,
        unique=True,
        help_text="Voucher code, stored upper-case and matched case-insensitively",
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
    usage_count = models.IntegerField(
        db_column="UsageCount",
        default=0,
        help_text="Number of transactions that used this voucher",
    )

    class Meta:
        managed = True
        db_table = "AffiliateVouchers"
        verbose_name = "Affiliate Voucher"
        verbose_name_plural = "Affiliate Vouchers"
        indexes = [
            models.Index(fields=["code", "is_active"], name="aff_vouchers_code_active_idx"),
        ]
        ordering = ["-created_at"]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.code} ({self.affiliate_id})"

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    @classmethod
    def claim(cls, affiliate_voucher_id: int) -> bool:
        """Atomically count one use; False if the voucher is no longer active."""
        updated = (
            cls.objects.live()
            .filter(pk=affiliate_voucher_id)
            .update(usage_count=F("usage_count") + 1)
        )
        return updated == 1


class AffiliateReferral(TimeStampedModel):
    """
    Attribution of a user to an affiliate, one row per (affiliate, user).
    """

    referral_id = models.AutoField(
        db_column="ReferralID",
        primary_key=True,
        help_text="Unique identifier for the referral",
    )
    affiliate = models.ForeignKey(
        Affiliate,
        on_delete=models.CASCADE,
        db_column="AffiliateID",
        related_name="referrals",
        help_text="Referring affiliate",
    )
    user = models.ForeignKey(
        "User",
        on_delete=models.CASCADE,
        db_column="UserID",
        related_name="affiliate_referrals",
        help_text="Referred user",
    )
    referral_code = models.CharField(
        db_column="ReferralCode",
        max_length=50,
        help_text="Voucher code that produced the referral",
    )
    signup_date = models.DateTimeField(
        db_column="SignupDate",
        help_text="When the referral was attributed",
    )
    status = models.CharField(
        db_column="Status",
        max_length=16,
        choices=ReferralStatus.choices(),
        default=ReferralStatus.CONVERTED.value,
        help_text="Referral status",
    )

    class Meta:
        managed = True
        db_table = "AffiliateReferrals"
        verbose_name = "Affiliate Referral"
        verbose_name_plural = "Affiliate Referrals"
        constraints = [
            models.UniqueConstraint(
                fields=["affiliate", "user"],
                name="uniq_affiliate_referral_user",
            ),
        ]
        ordering = ["-created_at"]
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.affiliate_id} -> {self.user_id}"
