import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _audit_fields():
    return [
        (
            "is_active",
            models.IntegerField(
                blank=True,
                db_column="IsActive",
                default=1,
                help_text="Flag indicating if the record is active (1=active, 0=inactive)",
                null=True,
            ),
        ),
        (
            "is_deleted",
            models.IntegerField(
                blank=True,
                db_column="IsDeleted",
                default=0,
                help_text="Flag indicating if the record is soft-deleted (1=deleted, 0=not deleted)",
                null=True,
            ),
        ),
        (
            "created_at",
            models.DateTimeField(
                auto_now_add=True,
                db_column="CreatedAt",
                help_text="Timestamp when the record was created",
                null=True,
            ),
        ),
        (
            "updated_at",
            models.DateTimeField(
                auto_now=True,
                db_column="UpdatedAt",
                help_text="Timestamp when the record was last updated",
                null=True,
            ),
        ),
        (
            "created_by",
            models.IntegerField(
                blank=True,
                db_column="CreatedBy",
                help_text="ID of the user who created this record",
                null=True,
            ),
        ),
        (
            "updated_by",
            models.IntegerField(
                blank=True,
                db_column="UpdatedBy",
                help_text="ID of the user who last updated this record",
                null=True,
            ),
        ),
    ]


def _timestamp_fields():
    return [
        (
            "created_at",
            models.DateTimeField(
                auto_now_add=True,
                db_column="CreatedAt",
                help_text="Timestamp when the record was created",
                null=True,
            ),
        ),
        (
            "updated_at",
            models.DateTimeField(
                auto_now=True,
                db_column="UpdatedAt",
                help_text="Timestamp when the record was last updated",
                null=True,
            ),
        ),
    ]


DISCOUNT_TYPE_CHOICES = [("percentage", "Percentage"), ("fixed", "Fixed")]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                *_audit_fields(),
                (
                    "last_login",
                    models.DateTimeField(
                        blank=True,
                        db_column="LastLogin",
                        help_text="Last login timestamp",
                        null=True,
                    ),
                ),
                (
                    "user_id",
                    models.AutoField(
                        db_column="UserID",
                        help_text="Unique identifier for the user",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "full_name",
                    models.CharField(
                        db_column="FullName",
                        help_text="User's full name",
                        max_length=255,
                    ),
                ),
                (
                    "email",
                    models.CharField(
                        db_column="Email",
                        help_text="User's email address (used for login)",
                        max_length=255,
                        unique=True,
                    ),
                ),
                (
                    "password",
                    models.CharField(
                        db_column="PasswordHash",
                        help_text="Hashed password",
                        max_length=255,
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[("Admin", "Administrator"), ("User", "Standard User")],
                        db_column="Role",
                        default="User",
                        help_text="User role determining permissions",
                        max_length=12,
                    ),
                ),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into the admin site.",
                    ),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions.",
                    ),
                ),
                (
                    "referred_by_affiliate",
                    models.CharField(
                        blank=True,
                        db_column="ReferredByAffiliate",
                        help_text="Affiliate code that first referred this user",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "referral_date",
                    models.DateTimeField(
                        blank=True,
                        db_column="ReferralDate",
                        help_text="When the affiliate attribution was recorded",
                        null=True,
                    ),
                ),
            ],
            options={
                "verbose_name": "User",
                "verbose_name_plural": "Users",
                "db_table": "Users",
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["email", "is_active"], name="users_email_active_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Affiliate",
            fields=[
                *_audit_fields(),
                (
                    "affiliate_id",
                    models.AutoField(
                        db_column="AffiliateID",
                        help_text="Unique identifier for the affiliate",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        db_column="Name",
                        help_text="Affiliate display name",
                        max_length=255,
                    ),
                ),
                (
                    "email",
                    models.CharField(
                        blank=True,
                        db_column="Email",
                        default="",
                        help_text="Affiliate contact email",
                        max_length=255,
                    ),
                ),
                (
                    "affiliate_code",
                    models.CharField(
                        db_column="AffiliateCode",
                        help_text="Affiliate's referral code",
                        max_length=50,
                        unique=True,
                    ),
                ),
            ],
            options={
                "verbose_name": "Affiliate",
                "verbose_name_plural": "Affiliates",
                "db_table": "Affiliates",
                "ordering": ["name"],
                "managed": True,
            },
        ),
        migrations.CreateModel(
            name="SubscriptionPlan",
            fields=[
                *_audit_fields(),
                (
                    "plan_id",
                    models.CharField(
                        db_column="PlanID",
                        help_text="Stable plan identifier (e.g. 'basic-monthly')",
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        db_column="Name",
                        help_text="Display name of the plan",
                        max_length=100,
                    ),
                ),
                (
                    "price",
                    models.BigIntegerField(
                        db_column="Price",
                        help_text="Price per period in whole currency units",
                    ),
                ),
                (
                    "original_price",
                    models.BigIntegerField(
                        blank=True,
                        db_column="OriginalPrice",
                        help_text="Strike-through list price, used as minimum-purchase basis when higher",
                        null=True,
                    ),
                ),
                (
                    "duration_days",
                    models.IntegerField(
                        db_column="DurationDays",
                        default=30,
                        help_text="Length of one subscription period in days",
                    ),
                ),
            ],
            options={
                "verbose_name": "Subscription Plan",
                "verbose_name_plural": "Subscription Plans",
                "db_table": "SubscriptionPlans",
                "ordering": ["price"],
                "managed": True,
            },
        ),
        migrations.CreateModel(
            name="Voucher",
            fields=[
                *_audit_fields(),
                (
                    "voucher_id",
                    models.AutoField(
                        db_column="VoucherID",
                        help_text="Unique identifier for the voucher",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        db_column="Code",
                        help_text="Voucher code, stored upper-case and matched case-insensitively",
                        max_length=50,
                        unique=True,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        blank=True,
                        db_column="Name",
                        default="",
                        help_text="Internal campaign name",
                        max_length=255,
                    ),
                ),
                (
                    "discount_type",
                    models.CharField(
                        choices=DISCOUNT_TYPE_CHOICES,
                        db_column="DiscountType",
                        help_text="Type of discount: percentage or fixed amount",
                        max_length=12,
                    ),
                ),
                (
                    "discount_value",
                    models.DecimalField(
                        db_column="DiscountValue",
                        decimal_places=2,
                        help_text="Percentage (0-100) or fixed amount in whole currency units",
                        max_digits=12,
                    ),
                ),
                (
                    "min_purchase",
                    models.BigIntegerField(
                        blank=True,
                        db_column="MinPurchase",
                        help_text="Minimum purchase amount required to use this voucher",
                        null=True,
                    ),
                ),
                (
                    "max_discount",
                    models.BigIntegerField(
                        blank=True,
                        db_column="MaxDiscount",
                        help_text="Cap on the discount amount for percentage vouchers",
                        null=True,
                    ),
                ),
                (
                    "start_date",
                    models.DateTimeField(
                        blank=True,
                        db_column="StartDate",
                        help_text="When the voucher becomes valid (empty = immediately)",
                        null=True,
                    ),
                ),
                (
                    "expiry_date",
                    models.DateTimeField(
                        blank=True,
                        db_column="ExpiryDate",
                        help_text="When the voucher expires (empty = never)",
                        null=True,
                    ),
                ),
                (
                    "applicable_plans",
                    models.JSONField(
                        blank=True,
                        db_column="ApplicablePlans",
                        default=list,
                        help_text="Plan identifiers this voucher applies to (empty = all plans)",
                    ),
                ),
                (
                    "applicable_type",
                    models.CharField(
                        choices=[
                            ("all", "All"),
                            ("subscription", "Subscription"),
                            ("addon", "Addon"),
                        ],
                        db_column="ApplicableType",
                        default="all",
                        help_text="Purchase category this voucher can be used for",
                        max_length=16,
                    ),
                ),
                (
                    "max_total_usage",
                    models.IntegerField(
                        blank=True,
                        db_column="MaxTotalUsage",
                        help_text="Maximum number of uses across all users (empty = unlimited)",
                        null=True,
                    ),
                ),
                (
                    "usage_count",
                    models.IntegerField(
                        db_column="UsageCount",
                        default=0,
                        help_text="Number of transactions that have claimed this voucher",
                    ),
                ),
            ],
            options={
                "verbose_name": "Voucher",
                "verbose_name_plural": "Vouchers",
                "db_table": "Vouchers",
                "ordering": ["-created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["code", "is_active"], name="vouchers_code_active_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="AffiliateVoucher",
            fields=[
                *_audit_fields(),
                (
                    "affiliate_voucher_id",
                    models.AutoField(
                        db_column="AffiliateVoucherID",
                        help_text="Unique identifier for the affiliate voucher",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        db_column="Code",
                        help_text="Voucher code, stored upper-case and matched case-insensitively",
                        max_length=50,
                        unique=True,
                    ),
                ),
                (
                    "discount_type",
                    models.CharField(
                        choices=DISCOUNT_TYPE_CHOICES,
                        db_column="DiscountType",
                        help_text="Type of discount: percentage or fixed amount",
                        max_length=12,
                    ),
                ),
                (
                    "discount_value",
                    models.DecimalField(
                        db_column="DiscountValue",
                        decimal_places=2,
                        help_text="Percentage (0-100) or fixed amount in whole currency units",
                        max_digits=12,
                    ),
                ),
                (
                    "usage_count",
                    models.IntegerField(
                        db_column="UsageCount",
                        default=0,
                        help_text="Number of transactions that used this voucher",
                    ),
                ),
                (
                    "affiliate",
                    models.ForeignKey(
                        db_column="AffiliateID",
                        help_text="Affiliate that owns this voucher",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vouchers",
                        to="billing.affiliate",
                    ),
                ),
            ],
            options={
                "verbose_name": "Affiliate Voucher",
                "verbose_name_plural": "Affiliate Vouchers",
                "db_table": "AffiliateVouchers",
                "ordering": ["-created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["code", "is_active"],
                        name="aff_vouchers_code_active_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Subscription",
            fields=[
                *_audit_fields(),
                (
                    "subscription_id",
                    models.AutoField(
                        db_column="SubscriptionID",
                        help_text="Unique identifier for the subscription",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "start_date",
                    models.DateTimeField(
                        db_column="StartDate",
                        help_text="When the subscription period started",
                    ),
                ),
                (
                    "end_date",
                    models.DateTimeField(
                        db_column="EndDate",
                        help_text="When the subscription period ends",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("expired", "Expired"),
                            ("cancelled", "Cancelled"),
                        ],
                        db_column="Status",
                        default="active",
                        help_text="Current subscription status",
                        max_length=20,
                    ),
                ),
                (
                    "plan",
                    models.ForeignKey(
                        db_column="PlanID",
                        help_text="Plan the user is subscribed to",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="subscriptions",
                        to="billing.subscriptionplan",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="UserID",
                        help_text="Subscribed user",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="subscriptions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Subscription",
                "verbose_name_plural": "Subscriptions",
                "db_table": "Subscriptions",
                "ordering": ["-created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["user", "status"], name="subscriptions_user_status_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Transaction",
            fields=[
                *_timestamp_fields(),
                (
                    "transaction_id",
                    models.CharField(
                        db_column="TransactionID",
                        help_text="Human-legible identifier, e.g. TXN-1700000000000-1A2B3C4D",
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "plan_id",
                    models.CharField(
                        db_column="PlanID",
                        help_text="Plan identifier or synthetic add-on product identifier",
                        max_length=64,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[("subscription", "Subscription"), ("addon", "Addon")],
                        db_column="Category",
                        help_text="Purchase category",
                        max_length=16,
                    ),
                ),
                (
                    "quantity",
                    models.IntegerField(
                        blank=True,
                        db_column="Quantity",
                        help_text="Add-on quantity",
                        null=True,
                    ),
                ),
                (
                    "duration_mode",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("fixed_30_days", "Fixed 30 Days"),
                            ("following_subscription", "Following Subscription"),
                        ],
                        db_column="DurationMode",
                        help_text="Add-on duration policy",
                        max_length=32,
                        null=True,
                    ),
                ),
                (
                    "base_amount",
                    models.BigIntegerField(
                        db_column="BaseAmount",
                        help_text="Amount before discount and tax",
                    ),
                ),
                (
                    "discount_amount",
                    models.BigIntegerField(
                        blank=True,
                        db_column="DiscountAmount",
                        help_text="Discount applied (empty when none)",
                        null=True,
                    ),
                ),
                (
                    "tax_amount",
                    models.BigIntegerField(
                        db_column="TaxAmount",
                        help_text="Tax on the discounted base",
                    ),
                ),
                (
                    "settlement_code",
                    models.IntegerField(
                        db_column="SettlementCode",
                        help_text="Random code added to the total for transfer reconciliation",
                    ),
                ),
                (
                    "total_amount",
                    models.BigIntegerField(
                        db_column="TotalAmount",
                        help_text="Amount the user must transfer",
                    ),
                ),
                (
                    "voucher_code",
                    models.CharField(
                        blank=True,
                        db_column="VoucherCode",
                        help_text="Voucher code applied to this transaction",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        db_column="PaymentMethod",
                        default="manual",
                        help_text="Payment method (manual bank transfer)",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("waiting_confirmation", "Waiting Confirmation"),
                            ("paid", "Paid"),
                            ("rejected", "Rejected"),
                            ("expired", "Expired"),
                        ],
                        db_column="PaymentStatus",
                        default="pending",
                        help_text="Payment lifecycle status",
                        max_length=24,
                    ),
                ),
                (
                    "effective_start",
                    models.DateTimeField(
                        db_column="EffectiveStart",
                        help_text="Start of the purchased period",
                    ),
                ),
                (
                    "effective_end",
                    models.DateTimeField(
                        blank=True,
                        db_column="EffectiveEnd",
                        help_text="End of the purchased period",
                        null=True,
                    ),
                ),
                (
                    "expires_at",
                    models.DateTimeField(
                        blank=True,
                        db_column="ExpiresAt",
                        help_text="When the unpaid transaction expires",
                        null=True,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="UserID",
                        help_text="Purchasing user",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Transaction",
                "verbose_name_plural": "Transactions",
                "db_table": "Transactions",
                "ordering": ["-created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["user", "payment_status"],
                        name="transactions_user_status_idx",
                    ),
                    models.Index(
                        fields=["payment_status", "expires_at"],
                        name="transactions_status_expiry_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("payment_status", "pending")),
                        fields=("settlement_code",),
                        name="uniq_pending_settlement_code",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="VoucherUsage",
            fields=[
                *_timestamp_fields(),
                (
                    "usage_id",
                    models.AutoField(
                        db_column="UsageID",
                        help_text="Unique identifier for the usage record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "voucher_code",
                    models.CharField(
                        db_column="VoucherCode",
                        help_text="Code as applied",
                        max_length=50,
                    ),
                ),
                (
                    "discount_type",
                    models.CharField(
                        choices=DISCOUNT_TYPE_CHOICES,
                        db_column="DiscountType",
                        help_text="Discount kind at time of use",
                        max_length=12,
                    ),
                ),
                (
                    "discount_value",
                    models.DecimalField(
                        db_column="DiscountValue",
                        decimal_places=2,
                        help_text="Discount value at time of use",
                        max_digits=12,
                    ),
                ),
                (
                    "discount_amount",
                    models.BigIntegerField(
                        db_column="DiscountAmount",
                        help_text="Discount granted, in whole currency units",
                    ),
                ),
                (
                    "plan_id",
                    models.CharField(
                        db_column="PlanID",
                        help_text="Plan or add-on product identifier",
                        max_length=64,
                    ),
                ),
                (
                    "base_amount",
                    models.BigIntegerField(
                        db_column="BaseAmount",
                        help_text="Base amount of the transaction",
                    ),
                ),
                (
                    "total_before_discount",
                    models.BigIntegerField(
                        db_column="TotalBeforeDiscount",
                        help_text="Total the user would have paid without the voucher",
                    ),
                ),
                (
                    "total_after_discount",
                    models.BigIntegerField(
                        db_column="TotalAfterDiscount",
                        help_text="Total the user pays with the voucher",
                    ),
                ),
                (
                    "affiliate_voucher",
                    models.ForeignKey(
                        blank=True,
                        db_column="AffiliateVoucherID",
                        help_text="Affiliate voucher that was applied",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="usages",
                        to="billing.affiliatevoucher",
                    ),
                ),
                (
                    "transaction",
                    models.OneToOneField(
                        db_column="TransactionID",
                        help_text="Transaction the voucher was applied to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="voucher_usage",
                        to="billing.transaction",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="UserID",
                        help_text="Purchasing user",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="voucher_usages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "voucher",
                    models.ForeignKey(
                        blank=True,
                        db_column="VoucherID",
                        help_text="Generic voucher that was applied",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="usages",
                        to="billing.voucher",
                    ),
                ),
            ],
            options={
                "verbose_name": "Voucher Usage",
                "verbose_name_plural": "Voucher Usages",
                "db_table": "VoucherUsages",
                "ordering": ["-created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["voucher_code"], name="voucher_usages_code_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="AffiliateReferral",
            fields=[
                *_timestamp_fields(),
                (
                    "referral_id",
                    models.AutoField(
                        db_column="ReferralID",
                        help_text="Unique identifier for the referral",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "referral_code",
                    models.CharField(
                        db_column="ReferralCode",
                        help_text="Voucher code that produced the referral",
                        max_length=50,
                    ),
                ),
                (
                    "signup_date",
                    models.DateTimeField(
                        db_column="SignupDate",
                        help_text="When the referral was attributed",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("converted", "Converted")],
                        db_column="Status",
                        default="converted",
                        help_text="Referral status",
                        max_length=16,
                    ),
                ),
                (
                    "affiliate",
                    models.ForeignKey(
                        db_column="AffiliateID",
                        help_text="Referring affiliate",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="referrals",
                        to="billing.affiliate",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="UserID",
                        help_text="Referred user",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="affiliate_referrals",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Affiliate Referral",
                "verbose_name_plural": "Affiliate Referrals",
                "db_table": "AffiliateReferrals",
                "ordering": ["-created_at"],
                "managed": True,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("affiliate", "user"),
                        name="uniq_affiliate_referral_user",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="PaymentSettings",
            fields=[
                *_audit_fields(),
                (
                    "payment_settings_id",
                    models.AutoField(
                        db_column="PaymentSettingsID",
                        help_text="Unique identifier for the settings row",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "bank_name",
                    models.CharField(
                        db_column="BankName",
                        help_text="Bank shown in the payment instructions",
                        max_length=100,
                    ),
                ),
                (
                    "account_number",
                    models.CharField(
                        db_column="AccountNumber",
                        help_text="Destination account number",
                        max_length=50,
                    ),
                ),
                (
                    "account_name",
                    models.CharField(
                        db_column="AccountName",
                        help_text="Destination account holder",
                        max_length=255,
                    ),
                ),
                (
                    "default_voucher_enabled",
                    models.BooleanField(
                        db_column="DefaultVoucherEnabled",
                        default=False,
                        help_text="Apply the default voucher when a subscription purchase has no code",
                    ),
                ),
                (
                    "default_voucher",
                    models.ForeignKey(
                        blank=True,
                        db_column="DefaultVoucherID",
                        help_text="Voucher applied by default to subscription purchases",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="billing.voucher",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment Settings",
                "verbose_name_plural": "Payment Settings",
                "db_table": "PaymentSettings",
                "managed": True,
            },
        ),
        migrations.CreateModel(
            name="RateLimitSettings",
            fields=[
                *_audit_fields(),
                (
                    "rate_limit_settings_id",
                    models.AutoField(
                        db_column="RateLimitSettingsID",
                        help_text="Unique identifier for the settings row",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "max_attempts",
                    models.IntegerField(
                        db_column="MaxAttempts",
                        default=5,
                        help_text="Attempts allowed inside the window",
                    ),
                ),
                (
                    "window_minutes",
                    models.IntegerField(
                        db_column="WindowMinutes",
                        default=15,
                        help_text="Sliding window length in minutes",
                    ),
                ),
                (
                    "block_duration_minutes",
                    models.IntegerField(
                        db_column="BlockDurationMinutes",
                        default=30,
                        help_text="How long an identity stays blocked after exceeding the limit",
                    ),
                ),
                (
                    "is_enabled",
                    models.BooleanField(
                        db_column="IsEnabled",
                        default=True,
                        help_text="Whether purchase rate limiting is enforced",
                    ),
                ),
            ],
            options={
                "verbose_name": "Rate Limit Settings",
                "verbose_name_plural": "Rate Limit Settings",
                "db_table": "RateLimitSettings",
                "managed": True,
            },
        ),
    ]
