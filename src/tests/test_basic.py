"""
Basic tests for the settlement engine - smoke tests for configuration and models.
"""

from decimal import Decimal

import pytest


@pytest.mark.unit
class TestDjangoConfiguration:
    """Test that Django is configured correctly."""

    def test_django_is_configured(self):
        from django.conf import settings

        assert settings.DJANGO_ENV == "test"
        assert settings.AUTH_USER_MODEL == "billing.User"

    def test_installed_apps(self):
        from django.conf import settings

        required_apps = ["django.contrib.auth", "rest_framework", "django_celery_beat", "billing"]
        for app in required_apps:
            assert app in settings.INSTALLED_APPS

    def test_pricing_config_reads_settings(self):
        from datetime import timedelta

        from billing.services.pricing.config import PricingConfig

        config = PricingConfig.from_settings()
        assert config.tax_rate_percent == Decimal("11")
        assert config.settlement_code_min == 100
        assert config.settlement_code_max == 999
        assert config.addon_monthly_rates == {"extra_accounts": 99000}
        assert config.subscription_expiry == timedelta(days=7)
        assert config.addon_expiry == timedelta(hours=24)
        assert config.payment_instructions["account_number"] == "1234567890"

    def test_pricing_config_validation(self):
        from billing.services.pricing.config import PricingConfig

        with pytest.raises(ValueError):
            PricingConfig(tax_rate_percent=Decimal("-1"))
        with pytest.raises(ValueError):
            PricingConfig(settlement_code_max_attempts=0)
        with pytest.raises(ValueError):
            PricingConfig(addon_quantity_min=5, addon_quantity_max=2)


@pytest.mark.unit
class TestUser:
    def test_create_user(self):
        from billing.models import User

        user = User.objects.create_user(
            email="New@Example.com", password="testpass123", full_name="New User"
        )
        assert user.email == "New@example.com"
        assert user.check_password("testpass123")
        assert user.is_active == 1
        assert user.referred_by_affiliate is None
        assert user.id == user.user_id

    def test_create_user_no_email_raises(self):
        from billing.models import User

        with pytest.raises(ValueError):
            User.objects.create_user(email="", password="x")

    def test_create_superuser(self):
        from billing.models import User

        admin = User.objects.create_superuser(
            email="admin@example.com", password="adminpass123", full_name="Admin"
        )
        assert admin.is_staff is True
        assert admin.has_perm("billing.view_transaction")


@pytest.mark.unit
class TestModels:
    def test_voucher_code_upper_cased(self, make_voucher):
        voucher = make_voucher(code=" spring24 ")
        assert voucher.code == "SPRING24"

    def test_voucher_claim_respects_limit(self, make_voucher):
        from billing.models import Voucher

        voucher = make_voucher(max_total_usage=1)
        assert Voucher.claim(voucher.voucher_id) is True
        assert Voucher.claim(voucher.voucher_id) is False

        voucher.refresh_from_db()
        assert voucher.usage_count == 1

    def test_unlimited_voucher_claim(self, make_voucher):
        from billing.models import Voucher

        voucher = make_voucher()
        assert all(Voucher.claim(voucher.voucher_id) for _ in range(3))

    def test_live_queryset(self, make_voucher):
        from billing.models import Voucher

        make_voucher(code="LIVE")
        make_voucher(code="OFF", is_active=0)
        make_voucher(code="GONE").soft_delete()

        assert list(Voucher.objects.live().values_list("code", flat=True)) == ["LIVE"]
        assert Voucher.objects.not_deleted().count() == 2

    def test_plan_minimum_purchase_basis(self, basic_plan):
        assert basic_plan.minimum_purchase_basis == 100000
        basic_plan.original_price = 150000
        assert basic_plan.minimum_purchase_basis == 150000

    def test_current_subscription_is_latest_active(
        self, test_user, make_subscription, fixed_now
    ):
        from billing.models import Subscription

        make_subscription(days_left=10, status="cancelled")
        active = make_subscription(days_left=20)

        assert Subscription.current_for(test_user, fixed_now) == active

    def test_referral_unique_per_affiliate_and_user(self, test_user, affiliate, fixed_now):
        from django.db import IntegrityError, transaction

        from billing.models import AffiliateReferral

        AffiliateReferral.objects.create(
            affiliate=affiliate, user=test_user, referral_code="FRIEND10", signup_date=fixed_now
        )
        with pytest.raises(IntegrityError), transaction.atomic():
            AffiliateReferral.objects.create(
                affiliate=affiliate,
                user=test_user,
                referral_code="FRIEND10",
                signup_date=fixed_now,
            )

    def test_payment_status_open_statuses(self):
        from billing.models import PaymentStatus

        assert PaymentStatus.open_statuses() == ["pending", "waiting_confirmation"]
