"""
Unit tests for add-on duration pricing.
"""

from datetime import timedelta

import pytest


@pytest.fixture
def pricer(pricing_config):
    from billing.services.pricing.duration import DurationPricer

    return DurationPricer(pricing_config)


@pytest.mark.unit
class TestRemainingDays:
    def test_whole_days(self, fixed_now):
        from billing.services.pricing.duration import remaining_days

        assert remaining_days(fixed_now + timedelta(days=15), fixed_now) == 15

    def test_partial_day_rounds_up(self, fixed_now):
        from billing.services.pricing.duration import remaining_days

        assert remaining_days(fixed_now + timedelta(days=14, hours=1), fixed_now) == 15
        assert remaining_days(fixed_now + timedelta(seconds=1), fixed_now) == 1


@pytest.mark.unit
class TestDurationQuote:
    def test_following_subscription_prorata(self, pricer, fixed_now):
        """99000 monthly rate, 15 days left."""
        end = fixed_now + timedelta(days=15)
        quote = pricer.quote(
            addon_type="extra_accounts",
            quantity=1,
            mode="following_subscription",
            now=fixed_now,
            subscription_end=end,
        )
        assert quote.billable_days == 15
        assert quote.unit_price == 49500
        assert quote.subtotal == 49500
        assert quote.effective_end == end
        assert quote.product_id == "addon-extra_accounts-1-prorata"

    def test_quantity_multiplies_unit_price(self, pricer, fixed_now):
        quote = pricer.quote(
            addon_type="extra_accounts",
            quantity=3,
            mode="following_subscription",
            now=fixed_now,
            subscription_end=fixed_now + timedelta(days=15),
        )
        assert quote.subtotal == 3 * 49500

    def test_fixed_mode_charges_full_period(self, pricer, fixed_now):
        quote = pricer.quote(
            addon_type="extra_accounts",
            quantity=2,
            mode="fixed_30_days",
            now=fixed_now,
            subscription_end=fixed_now + timedelta(days=3),
        )
        assert quote.billable_days == 30
        assert quote.unit_price == 99000
        assert quote.subtotal == 198000
        assert quote.effective_end == fixed_now + timedelta(days=30)
        assert quote.product_id == "addon-extra_accounts-2-fixed"

    def test_expiring_too_soon(self, pricer, fixed_now):
        from billing.services.pricing.errors import SubscriptionExpiringTooSoon

        with pytest.raises(SubscriptionExpiringTooSoon) as exc_info:
            pricer.quote(
                addon_type="extra_accounts",
                quantity=1,
                mode="following_subscription",
                now=fixed_now,
                subscription_end=fixed_now + timedelta(days=5),
            )
        assert exc_info.value.details == {"remaining_days": 5, "minimum_days": 7}

    def test_minimum_days_is_inclusive(self, pricer, fixed_now):
        quote = pricer.quote(
            addon_type="extra_accounts",
            quantity=1,
            mode="following_subscription",
            now=fixed_now,
            subscription_end=fixed_now + timedelta(days=7),
        )
        assert quote.unit_price == 23100

    @pytest.mark.parametrize("quantity", [0, 21, -1])
    def test_quantity_bounds(self, pricer, fixed_now, quantity):
        from billing.services.pricing.errors import InvalidInput

        with pytest.raises(InvalidInput):
            pricer.quote(
                addon_type="extra_accounts",
                quantity=quantity,
                mode="fixed_30_days",
                now=fixed_now,
                subscription_end=fixed_now + timedelta(days=15),
            )

    def test_unknown_mode(self, pricer, fixed_now):
        from billing.services.pricing.errors import InvalidInput

        with pytest.raises(InvalidInput):
            pricer.quote(
                addon_type="extra_accounts",
                quantity=1,
                mode="forever",
                now=fixed_now,
                subscription_end=fixed_now + timedelta(days=15),
            )

    def test_unknown_addon_type(self, pricer, fixed_now):
        from billing.services.pricing.errors import InvalidInput

        with pytest.raises(InvalidInput):
            pricer.quote(
                addon_type="extra_storage",
                quantity=1,
                mode="fixed_30_days",
                now=fixed_now,
                subscription_end=fixed_now + timedelta(days=15),
            )

    def test_configured_minimum(self, fixed_now):
        from billing.services.pricing.config import PricingConfig
        from billing.services.pricing.duration import DurationPricer

        pricer = DurationPricer(PricingConfig(min_following_days=1))
        quote = pricer.quote(
            addon_type="extra_accounts",
            quantity=1,
            mode="following_subscription",
            now=fixed_now,
            subscription_end=fixed_now + timedelta(days=5),
        )
        assert quote.unit_price == 16500


@pytest.mark.unit
class TestDurationPricerWithSubscription:
    def test_uses_current_subscription(self, pricer, test_user, make_subscription, fixed_now):
        subscription = make_subscription(days_left=15)

        quote = pricer.price(
            test_user,
            addon_type="extra_accounts",
            quantity=1,
            mode="following_subscription",
            now=fixed_now,
        )
        assert quote.unit_price == 49500
        assert quote.subscription_id == subscription.subscription_id

    def test_requires_subscription(self, pricer, test_user, fixed_now):
        from billing.services.pricing.errors import SubscriptionRequired

        with pytest.raises(SubscriptionRequired):
            pricer.price(
                test_user,
                addon_type="extra_accounts",
                quantity=1,
                mode="fixed_30_days",
                now=fixed_now,
            )

    def test_ended_subscription_does_not_count(
        self, pricer, test_user, make_subscription, fixed_now
    ):
        from billing.services.pricing.errors import SubscriptionRequired

        make_subscription(days_left=0)
        with pytest.raises(SubscriptionRequired):
            pricer.price(
                test_user,
                addon_type="extra_accounts",
                quantity=1,
                mode="following_subscription",
                now=fixed_now,
            )

    def test_input_checked_before_subscription(self, pricer, test_user, fixed_now):
        from billing.services.pricing.errors import InvalidInput

        with pytest.raises(InvalidInput):
            pricer.price(
                test_user,
                addon_type="extra_accounts",
                quantity=50,
                mode="fixed_30_days",
                now=fixed_now,
            )
