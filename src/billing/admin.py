from django.contrib import admin
from django.utils.html import format_html

from .models import (
    Affiliate,
    AffiliateReferral,
    AffiliateVoucher,
    PaymentSettings,
    RateLimitSettings,
    Subscription,
    SubscriptionPlan,
    Transaction,
    User,
    Voucher,
    VoucherUsage,
)

SYSTEM_FIELDS = (
    "System Fields",
    {
        "fields": (
            "is_active",
            "is_deleted",
            "created_by",
            "updated_by",
            "created_at",
            "updated_at",
        ),
        "classes": ("collapse",),
    },
)


class StatusAdminMixin:
    @admin.display(description="Status")
    def is_active_status(self, obj):
        if obj.is_active == 1:
            return format_html('<span style="color: {};">{}</span>', "green", "Active")
        return format_html('<span style="color: {};">{}</span>', "red", "Inactive")


# =============================================================================
# USERS & SUBSCRIPTIONS
# =============================================================================


@admin.register(User)
class UserAdmin(StatusAdminMixin, admin.ModelAdmin):
    list_display = ("user_id", "full_name", "email", "role", "referred_by_affiliate", "is_active_status")
    list_filter = ("role", "is_active", "is_deleted")
    search_fields = ("full_name", "email", "referred_by_affiliate")
    readonly_fields = ("user_id", "created_at", "updated_at", "password", "referral_date")


@admin.register(SubscriptionPlan)
class SubscriptionPlanAdmin(StatusAdminMixin, admin.ModelAdmin):
    list_display = ("plan_id", "name", "price", "original_price", "duration_days", "is_active_status")
    list_filter = ("is_active",)
    search_fields = ("plan_id", "name")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ("subscription_id", "user", "plan", "status", "start_date", "end_date")
    list_filter = ("status",)
    search_fields = ("user__email",)
    raw_id_fields = ("user",)


# =============================================================================
# VOUCHERS & AFFILIATES
# =============================================================================


@admin.register(Voucher)
class VoucherAdmin(StatusAdminMixin, admin.ModelAdmin):
    list_display = (
        "code",
        "discount_type",
        "discount_value",
        "applicable_type",
        "usage_count",
        "max_total_usage",
        "expiry_date",
        "is_active_status",
    )
    list_filter = ("discount_type", "applicable_type", "is_active")
    search_fields = ("code", "name")
    readonly_fields = ("voucher_id", "usage_count", "created_at", "updated_at")

    fieldsets = (
        ("Voucher", {"fields": ("code", "name", "discount_type", "discount_value", "max_discount")}),
        (
            "Rules",
            {
                "fields": (
                    "min_purchase",
                    "start_date",
                    "expiry_date",
                    "applicable_plans",
                    "applicable_type",
                    "max_total_usage",
                    "usage_count",
                )
            },
        ),
        SYSTEM_FIELDS,
    )


@admin.register(Affiliate)
class AffiliateAdmin(StatusAdminMixin, admin.ModelAdmin):
    list_display = ("affiliate_id", "name", "affiliate_code", "email", "is_active_status")
    search_fields = ("name", "affiliate_code", "email")


@admin.register(AffiliateVoucher)
class AffiliateVoucherAdmin(StatusAdminMixin, admin.ModelAdmin):
    list_display = ("code", "affiliate", "discount_type", "discount_value", "usage_count", "is_active_status")
    list_filter = ("discount_type", "is_active")
    search_fields = ("code", "affiliate__name", "affiliate__affiliate_code")
    readonly_fields = ("usage_count", "created_at", "updated_at")


@admin.register(AffiliateReferral)
class AffiliateReferralAdmin(admin.ModelAdmin):
    list_display = ("referral_id", "affiliate", "user", "referral_code", "status", "signup_date")
    list_filter = ("status",)
    search_fields = ("referral_code", "user__email")
    raw_id_fields = ("user",)


# =============================================================================
# TRANSACTIONS
# =============================================================================


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "transaction_id",
        "user",
        "category",
        "plan_id",
        "total_amount",
        "settlement_code",
        "voucher_code",
        "payment_status",
        "expires_at",
    )
    list_filter = ("payment_status", "category")
    search_fields = ("transaction_id", "user__email", "voucher_code")
    raw_id_fields = ("user",)
    readonly_fields = (
        "transaction_id",
        "base_amount",
        "discount_amount",
        "tax_amount",
        "settlement_code",
        "total_amount",
        "created_at",
        "updated_at",
    )


@admin.register(VoucherUsage)
class VoucherUsageAdmin(admin.ModelAdmin):
    list_display = ("usage_id", "voucher_code", "transaction", "user", "discount_amount", "created_at")
    search_fields = ("voucher_code", "transaction__transaction_id")
    raw_id_fields = ("transaction", "user")


# =============================================================================
# CONFIGURATION
# =============================================================================


@admin.register(PaymentSettings)
class PaymentSettingsAdmin(StatusAdminMixin, admin.ModelAdmin):
    list_display = ("bank_name", "account_number", "account_name", "default_voucher_enabled", "is_active_status")


@admin.register(RateLimitSettings)
class RateLimitSettingsAdmin(StatusAdminMixin, admin.ModelAdmin):
    list_display = ("max_attempts", "window_minutes", "block_duration_minutes", "is_enabled", "is_active_status")
