"""
Unit tests for settlement code generation.
"""

from datetime import timedelta

import pytest


@pytest.fixture
def pending_transaction(test_user, fixed_now):
    """Create a pending transaction holding settlement code 345."""
    from billing.models import Transaction

    def _make(code=345, status="pending", transaction_id="TXN-1-AAAAAAAA"):
        return Transaction.objects.create(
            transaction_id=transaction_id,
            user=test_user,
            plan_id="basic",
            category="subscription",
            base_amount=100000,
            tax_amount=11000,
            settlement_code=code,
            total_amount=111000 + code,
            payment_status=status,
            effective_start=fixed_now,
            effective_end=fixed_now + timedelta(days=30),
            expires_at=fixed_now + timedelta(days=7),
        )

    return _make


@pytest.mark.unit
class TestSettlementCodeGenerator:
    def test_draws_within_range(self, pricing_config):
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        generator = SettlementCodeGenerator(pricing_config)
        for _ in range(50):
            assert 100 <= generator.draw() <= 999

    def test_free_code_returned(self, pricing_config, stub_rng):
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        generator = SettlementCodeGenerator(pricing_config, rng=stub_rng(345))
        assert generator.generate() == 345

    def test_skips_code_held_by_pending_transaction(
        self, pricing_config, stub_rng, pending_transaction
    ):
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        pending_transaction(code=345)
        rng = stub_rng(345, 345, 612)
        generator = SettlementCodeGenerator(pricing_config, rng=rng)

        assert generator.generate() == 612
        assert rng.calls == 3

    def test_settled_transactions_release_their_code(
        self, pricing_config, stub_rng, pending_transaction
    ):
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        pending_transaction(code=345, status="paid")
        pending_transaction(code=345, status="expired", transaction_id="TXN-2-BBBBBBBB")
        generator = SettlementCodeGenerator(pricing_config, rng=stub_rng(345))

        assert generator.generate() == 345

    def test_exhaustion_after_bounded_attempts(
        self, pricing_config, stub_rng, pending_transaction
    ):
        from billing.services.pricing.errors import SettlementCodeExhausted
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        pending_transaction(code=345)
        rng = stub_rng(345)
        generator = SettlementCodeGenerator(pricing_config, rng=rng)

        with pytest.raises(SettlementCodeExhausted) as exc_info:
            generator.generate()
        assert rng.calls == pricing_config.settlement_code_max_attempts
        assert exc_info.value.http_status == 503

    def test_exclude_active_false_allows_reuse(
        self, pricing_config, stub_rng, pending_transaction
    ):
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        pending_transaction(code=345)
        generator = SettlementCodeGenerator(pricing_config, rng=stub_rng(345))
        assert generator.generate(exclude_active=False) == 345

    def test_single_digit_range(self):
        from billing.services.pricing.config import PricingConfig
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        config = PricingConfig(settlement_code_min=1, settlement_code_max=9)
        generator = SettlementCodeGenerator(config)
        assert all(1 <= generator.draw() <= 9 for _ in range(20))

    def test_invalid_range_rejected(self):
        from billing.services.pricing.config import PricingConfig

        with pytest.raises(ValueError):
            PricingConfig(settlement_code_min=500, settlement_code_max=100)


@pytest.mark.unit
class TestPendingCodeConstraint:
    def test_two_pending_transactions_cannot_share_a_code(self, pending_transaction):
        from django.db import IntegrityError, transaction

        pending_transaction(code=345)
        with pytest.raises(IntegrityError), transaction.atomic():
            pending_transaction(code=345, transaction_id="TXN-2-BBBBBBBB")

    def test_code_reusable_once_settled(self, pending_transaction):
        from billing.models import Transaction

        pending_transaction(code=345, status="rejected")
        pending_transaction(code=345, transaction_id="TXN-2-BBBBBBBB")
        assert Transaction.objects.filter(settlement_code=345).count() == 2
