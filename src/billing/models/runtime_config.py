# billing/models/runtime_config.py
"""
Operator-editable configuration stored in the database.

Provides:
- PaymentSettings: Bank transfer instructions and the default voucher
- RateLimitSettings: Purchase-attempt rate limit parameters
"""

from django.db import models

from .base import BaseModel


class PaymentSettings(BaseModel):
    """
    Payment configuration edited from the admin.

    The most recent live row wins.
    """

    payment_settings_id = models.AutoField(
        db_column="PaymentSettingsID",
        primary_key=True,
        help_text="Unique identifier for the settings row",
    )
    bank_name = models.CharField(
        db_column="BankName",
        max_length=100,
        help_text="Bank shown in the payment instructions",
    )
    account_number = models.CharField(
        db_column="AccountNumber",
        max_length=50,
        help_text="Destination account number",
    )
    account_name = models.CharField(
        db_column="AccountName",
        max_length=255,
        help_text="Destination account holder",
    )
    default_voucher_enabled = models.BooleanField(
        db_column="DefaultVoucherEnabled",
        default=False,
        help_text="Apply the default voucher when a subscription purchase has no code",
    )
    default_voucher = models.ForeignKey(
        "Voucher",
        on_delete=models.SET_NULL,
        db_column="DefaultVoucherID",
        blank=True,
        null=True,
        related_name="+",
        help_text="Voucher applied by default to subscription purchases",
    )

    class Meta:
        managed = True
        db_table = "PaymentSettings"
        verbose_name = "Payment Settings"
        verbose_name_plural = "Payment Settings"
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.bank_name} {self.account_number}"

    @classmethod
    def current(cls) -> "PaymentSettings | None":
        return cls.objects.live().order_by("-updated_at", "-payment_settings_id").first()


class RateLimitSettings(BaseModel):
    """Rate limit parameters for purchase attempts."""

    rate_limit_settings_id = models.AutoField(
        db_column="RateLimitSettingsID",
        primary_key=True,
        help_text="Unique identifier for the settings row",
    )
    max_attempts = models.IntegerField(
        db_column="MaxAttempts",
        default=5,
        help_text="Attempts allowed inside the window",
    )
    window_minutes = models.IntegerField(
        db_column="WindowMinutes",
        default=15,
        help_text="Sliding window length in minutes",
    )
    block_duration_minutes = models.IntegerField(
        db_column="BlockDurationMinutes",
        default=30,
        help_text="How long an identity stays blocked after exceeding the limit",
    )
    is_enabled = models.BooleanField(
        db_column="IsEnabled",
        default=True,
        help_text="Whether purchase rate limiting is enforced",
    )

    class Meta:
        managed = True
        db_table = "RateLimitSettings"
        verbose_name = "Rate Limit Settings"
        verbose_name_plural = "Rate Limit Settings"
        app_label = "billing"

    def __str__(self) -> str:
        return f"{self.max_attempts}/{self.window_minutes}min"

    @classmethod
    def current(cls) -> "RateLimitSettings | None":
        return cls.objects.live().order_by("-updated_at", "-rate_limit_settings_id").first()
