"""
API tests for the purchase and voucher endpoints.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

SUBSCRIPTION_URL = "/api/billing/subscriptions/purchase/"
ADDON_URL = "/api/billing/addons/purchase/"
QUOTE_URL = "/api/billing/addons/quote/"
VALIDATE_URL = "/api/billing/vouchers/validate/"
LOOKUP_URL = "/api/billing/vouchers/affiliate-lookup/"


@pytest.fixture
def live_subscription(test_user, basic_plan):
    """Active subscription ending 15 days from the real clock."""
    from billing.models import Subscription

    now = timezone.now()
    return Subscription.objects.create(
        user=test_user,
        plan=basic_plan,
        start_date=now - timedelta(days=15),
        end_date=now + timedelta(days=15),
    )


@pytest.mark.unit
class TestSubscriptionPurchaseAPI:
    def test_requires_authentication(self, api_client, basic_plan):
        response = api_client.post(SUBSCRIPTION_URL, {"plan_id": "basic"}, format="json")
        assert response.status_code == 401

    def test_creates_pending_transaction(self, auth_client, basic_plan):
        from billing.models import Transaction

        client = auth_client["client"]
        response = client.post(SUBSCRIPTION_URL, {"plan_id": "basic"}, format="json")

        assert response.status_code == 201
        data = response.data["data"]
        assert data["base_amount"] == 100000
        assert data["tax_amount"] == 11000
        assert 100 <= data["settlement_code"] <= 999
        assert data["total_amount"] == 111000 + data["settlement_code"]
        assert data["payment_status"] == "pending"
        assert data["payment_instructions"]["reference"] == data["transaction_id"]
        assert "bookkeeping_warnings" not in data

        record = Transaction.objects.get(pk=data["transaction_id"])
        assert record.user_id == auth_client["user"].user_id

    def test_voucher_code_is_normalized(self, auth_client, basic_plan, make_voucher):
        make_voucher(code="SAVE10", max_discount=5000)

        response = auth_client["client"].post(
            SUBSCRIPTION_URL, {"plan_id": "basic", "voucher_code": "  save10 "}, format="json"
        )

        assert response.status_code == 201
        assert response.data["data"]["applied_voucher_code"] == "SAVE10"
        assert response.data["data"]["discount_amount"] == 5000

    def test_blank_voucher_code_is_ignored(self, auth_client, basic_plan):
        response = auth_client["client"].post(
            SUBSCRIPTION_URL, {"plan_id": "basic", "voucher_code": ""}, format="json"
        )
        assert response.status_code == 201
        assert response.data["data"]["applied_voucher_code"] is None

    def test_unknown_voucher(self, auth_client, basic_plan):
        from billing.models import Transaction

        response = auth_client["client"].post(
            SUBSCRIPTION_URL, {"plan_id": "basic", "voucher_code": "NOPE"}, format="json"
        )

        assert response.status_code == 400
        assert response.data["error"] == "VOUCHER_NOT_FOUND"
        assert response.data["details"] == {"code": "NOPE"}
        assert Transaction.objects.count() == 0

    def test_missing_plan_id(self, auth_client):
        response = auth_client["client"].post(SUBSCRIPTION_URL, {}, format="json")

        assert response.status_code == 400
        assert response.data["error"] == "INVALID_INPUT"
        assert "plan_id" in response.data["details"]

    def test_unknown_plan(self, auth_client):
        response = auth_client["client"].post(
            SUBSCRIPTION_URL, {"plan_id": "platinum"}, format="json"
        )
        assert response.status_code == 400
        assert response.data["error"] == "PLAN_UNAVAILABLE"

    def test_settlement_code_exhaustion_is_503(self, auth_client, basic_plan, monkeypatch):
        from billing.services.pricing.settlement_code import SettlementCodeGenerator

        monkeypatch.setattr(
            SettlementCodeGenerator, "candidates", lambda self, exclude_active=True: iter(())
        )

        response = auth_client["client"].post(
            SUBSCRIPTION_URL, {"plan_id": "basic"}, format="json"
        )
        assert response.status_code == 503
        assert response.data["error"] == "SETTLEMENT_CODE_EXHAUSTED"

    def test_repeated_attempts_are_throttled(self, auth_client):
        client = auth_client["client"]
        statuses = [
            client.post(SUBSCRIPTION_URL, {"plan_id": "platinum"}, format="json").status_code
            for _ in range(5)
        ]
        assert statuses == [400] * 5

        response = client.post(SUBSCRIPTION_URL, {"plan_id": "platinum"}, format="json")
        assert response.status_code == 429
        assert response.data["error"] == "RATE_LIMITED"
        assert response["Retry-After"] == str(30 * 60)

    def test_request_id_header(self, auth_client, basic_plan):
        response = auth_client["client"].post(
            SUBSCRIPTION_URL,
            {"plan_id": "basic"},
            format="json",
            HTTP_X_REQUEST_ID="req-123",
        )
        assert response["X-Request-ID"] == "req-123"


@pytest.mark.unit
class TestAddonPurchaseAPI:
    def test_following_subscription(self, auth_client, live_subscription):
        response = auth_client["client"].post(
            ADDON_URL,
            {"quantity": 1, "duration_mode": "following_subscription"},
            format="json",
        )

        assert response.status_code == 201
        data = response.data["data"]
        assert data["transaction_id"].startswith("ADDON-")
        assert data["base_amount"] == 49500
        assert data["billable_days"] == 15
        assert data["tax_amount"] == 5445

    def test_without_subscription(self, auth_client):
        response = auth_client["client"].post(
            ADDON_URL, {"quantity": 1, "duration_mode": "fixed_30_days"}, format="json"
        )
        assert response.status_code == 400
        assert response.data["error"] == "SUBSCRIPTION_REQUIRED"

    def test_quantity_above_maximum(self, auth_client, live_subscription):
        response = auth_client["client"].post(
            ADDON_URL, {"quantity": 21, "duration_mode": "fixed_30_days"}, format="json"
        )
        assert response.status_code == 400
        assert response.data["error"] == "INVALID_INPUT"

    def test_unknown_duration_mode(self, auth_client, live_subscription):
        response = auth_client["client"].post(
            ADDON_URL, {"quantity": 1, "duration_mode": "forever"}, format="json"
        )
        assert response.status_code == 400
        assert response.data["error"] == "INVALID_INPUT"


@pytest.mark.unit
class TestAddonQuoteAPI:
    def test_quote_does_not_create_transaction(self, auth_client, live_subscription):
        from billing.models import Transaction

        response = auth_client["client"].get(
            QUOTE_URL,
            {"quantity": 2, "duration_mode": "fixed_30_days", "voucher_code": "NOPE"},
        )

        assert response.status_code == 200
        data = response.data["data"]
        assert data["base_amount"] == 198000
        assert data["voucher_error"]["error"] == "VOUCHER_NOT_FOUND"
        assert Transaction.objects.count() == 0


@pytest.mark.unit
class TestValidateVoucherAPI:
    def test_valid_voucher(self, auth_client, basic_plan, make_voucher):
        make_voucher(code="FIXED1000", discount_type="fixed", discount_value=Decimal("1000"))

        response = auth_client["client"].post(
            VALIDATE_URL,
            {"code": "fixed1000", "category": "subscription", "amount": 100000, "plan_id": "basic"},
            format="json",
        )

        assert response.status_code == 200
        data = response.data["data"]
        assert data["valid"] is True
        assert data["discount_amount"] == 1000
        assert data["amount_after_discount"] == 99000

    def test_rejected_voucher(self, auth_client, basic_plan, make_voucher):
        make_voucher(code="ADDONONLY", applicable_type="addon")

        response = auth_client["client"].post(
            VALIDATE_URL,
            {"code": "ADDONONLY", "category": "subscription", "amount": 100000, "plan_id": "basic"},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["valid"] is False
        assert response.data["error"] == "VOUCHER_WRONG_APPLICABLE_TYPE"

    def test_plan_required_for_subscription(self, auth_client):
        response = auth_client["client"].post(
            VALIDATE_URL,
            {"code": "SAVE10", "category": "subscription", "amount": 100000},
            format="json",
        )
        assert response.status_code == 400
        assert response.data["error"] == "INVALID_INPUT"

    def test_validation_records_nothing(self, auth_client, make_voucher):
        voucher = make_voucher(code="SAVE10", max_total_usage=1)

        for _ in range(3):
            response = auth_client["client"].post(
                VALIDATE_URL,
                {"code": "SAVE10", "category": "addon", "amount": 50000},
                format="json",
            )
            assert response.status_code == 200

        voucher.refresh_from_db()
        assert voucher.usage_count == 0

    def test_minimum_purchase_uses_plan_basis(self, auth_client, make_voucher):
        """A strike-through list price counts toward the minimum, as at purchase."""
        from billing.models import SubscriptionPlan

        SubscriptionPlan.objects.create(
            plan_id="pro", name="Pro", price=100000, original_price=150000
        )
        make_voucher(code="BIGBASKET", min_purchase=120000)

        response = auth_client["client"].post(
            VALIDATE_URL,
            {"code": "BIGBASKET", "category": "subscription", "amount": 100000, "plan_id": "pro"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["data"]["discount_amount"] == 10000

    def test_unknown_plan_is_rejected(self, auth_client, make_voucher):
        make_voucher(code="SAVE10")

        response = auth_client["client"].post(
            VALIDATE_URL,
            {"code": "SAVE10", "category": "subscription", "amount": 100000, "plan_id": "nope"},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["valid"] is False
        assert response.data["error"] == "PLAN_UNAVAILABLE"


@pytest.mark.unit
class TestAffiliateVoucherLookupAPI:
    def test_lookup_with_channel_suffix(self, auth_client, affiliate_voucher):
        response = auth_client["client"].get(LOOKUP_URL, {"ref": "PARTNER01_IG"})

        assert response.status_code == 200
        data = response.data["data"]
        assert data["voucher_code"] == "FRIEND10"
        assert data["discount_type"] == "percentage"
        assert data["affiliate_code"] == "PARTNER01"

    def test_inactive_voucher_is_404(self, auth_client, affiliate_voucher):
        affiliate_voucher.deactivate()

        response = auth_client["client"].get(LOOKUP_URL, {"ref": "PARTNER01"})

        assert response.status_code == 404
        assert response.data["error"] == "VOUCHER_NOT_FOUND"

    def test_unknown_affiliate_is_404(self, auth_client):
        response = auth_client["client"].get(LOOKUP_URL, {"ref": "NOBODY"})
        assert response.status_code == 404

    def test_ref_is_required(self, auth_client):
        response = auth_client["client"].get(LOOKUP_URL)
        assert response.status_code == 400
        assert response.data["error"] == "INVALID_INPUT"
