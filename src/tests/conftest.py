"""
pytest configuration and shared fixtures for the settlement engine tests.
"""

import os
import sys
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from pathlib import Path

import django
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
os.environ.setdefault("DJANGO_ENV", "test")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "configuration.settings")

# Setup Django
django.setup()


class StubRandom:
    """Deterministic stand-in for random.Random, replays ``values`` then repeats the last."""

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls = 0

    def randint(self, a: int, b: int) -> int:
        index = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[index]


@pytest.fixture(autouse=True)
def enable_db_access(db):
    """Enable database access for all tests."""
    pass


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """The purchase limiter and its cached policy are process-wide."""
    from django.core.cache import cache

    from billing.services.rate_limit import purchase_rate_limiter

    purchase_rate_limiter.reset()
    cache.clear()
    yield
    purchase_rate_limiter.reset()
    cache.clear()


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 10, 9, 30, tzinfo=UTC)


@pytest.fixture
def pricing_config():
    from billing.services.pricing.config import PricingConfig

    return PricingConfig.from_settings()


@pytest.fixture
def stub_rng():
    return StubRandom


@pytest.fixture
def make_assembler(pricing_config, fixed_now):
    """Build a TransactionAssembler with a frozen clock and scripted settlement codes."""
    from billing.services.pricing.assembler import TransactionAssembler
    from billing.services.pricing.settlement_code import SettlementCodeGenerator

    def _make(*codes: int, config=None, now=None, **kwargs):
        config = config or pricing_config
        generator = SettlementCodeGenerator(config, rng=StubRandom(*(codes or (345,))))
        return TransactionAssembler(
            config=config,
            code_generator=generator,
            clock=lambda: now or fixed_now,
            **kwargs,
        )

    return _make


@pytest.fixture
def test_user():
    """Create a test user."""
    from billing.models import User

    return User.objects.create_user(
        email="buyer@example.com",
        password="testpass123",
        full_name="Test Buyer",
    )


@pytest.fixture
def other_user():
    from billing.models import User

    return User.objects.create_user(
        email="other@example.com",
        password="testpass123",
        full_name="Other Buyer",
    )


@pytest.fixture
def basic_plan():
    """A paid monthly plan priced at 100000."""
    from billing.models import SubscriptionPlan

    return SubscriptionPlan.objects.create(
        plan_id="basic",
        name="Basic",
        price=100000,
        duration_days=30,
    )


@pytest.fixture
def free_plan():
    from billing.models import SubscriptionPlan

    return SubscriptionPlan.objects.create(plan_id="free", name="Free", price=0)


@pytest.fixture
def make_subscription(test_user, basic_plan, fixed_now):
    """Active subscription for test_user ending ``days_left`` after fixed_now."""
    from billing.models import Subscription

    def _make(days_left=15, user=None, **extra):
        return Subscription.objects.create(
            user=user or test_user,
            plan=basic_plan,
            start_date=fixed_now - timedelta(days=30 - days_left),
            end_date=fixed_now + timedelta(days=days_left),
            **extra,
        )

    return _make


@pytest.fixture
def make_voucher():
    """Generic voucher factory; defaults to an open-ended 10% voucher."""
    from billing.models import Voucher

    def _make(code="SAVE10", **fields):
        fields.setdefault("discount_type", "percentage")
        fields.setdefault("discount_value", Decimal("10"))
        return Voucher.objects.create(code=code, **fields)

    return _make


@pytest.fixture
def affiliate():
    from billing.models import Affiliate

    return Affiliate.objects.create(
        name="Partner Store",
        email="partner@example.com",
        affiliate_code="PARTNER01",
    )


@pytest.fixture
def affiliate_voucher(affiliate):
    """10% affiliate voucher owned by ``affiliate``."""
    from billing.models import AffiliateVoucher

    return AffiliateVoucher.objects.create(
        affiliate=affiliate,
        code="FRIEND10",
        discount_type="percentage",
        discount_value=Decimal("10"),
    )


@pytest.fixture
def payment_settings():
    from billing.models import PaymentSettings

    return PaymentSettings.objects.create(
        bank_name="Mandiri",
        account_number="9876543210",
        account_name="PT Settlement Test",
    )


@pytest.fixture
def api_client():
    """API client for testing endpoints."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def auth_client(api_client, test_user):
    """Authenticated API client with the test_user."""
    from rest_framework_simplejwt.tokens import RefreshToken

    refresh = RefreshToken.for_user(test_user)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")

    return {"client": api_client, "user": test_user, "token": str(refresh.access_token)}


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
