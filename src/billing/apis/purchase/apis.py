# billing/apis/purchase/apis.py

import logging

from django.utils import timezone
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from billing.apis.throttling import (
    PurchaseAttemptThrottle,
    RateLimitedResponseMixin,
)
from billing.models import SubscriptionPlan
from billing.models.choices import PurchaseCategory
from billing.serializers.purchase_serializers import (
    AddonPurchaseSerializer,
    AffiliateLookupSerializer,
    SubscriptionPurchaseSerializer,
    VoucherValidationSerializer,
)
from billing.services.pricing.assembler import TransactionAssembler
from billing.services.pricing.errors import PlanUnavailable, PricingError, VoucherNotFound
from billing.services.pricing.vouchers import PurchaseContext, VoucherResolver

logger = logging.getLogger(__name__)

voucher_code_param = openapi.Schema(
    type=openapi.TYPE_STRING,
    description="Optional voucher or affiliate code (case-insensitive)",
)

pricing_result_response = openapi.Response(
    description="Transaction created; pay the total by bank transfer before expires_at",
)


def pricing_error_response(exc: PricingError) -> Response:
    return Response(exc.to_dict(), status=exc.http_status)


def validation_error_response(errors) -> Response:
    return Response(
        {"error": "INVALID_INPUT", "message": "Invalid request", "details": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class SubscriptionPurchaseAPI(RateLimitedResponseMixin, APIView):
    """
    Create a pending subscription transaction for the authenticated user.
    """

    permission_classes = [IsAuthenticated]
    throttle_classes = [PurchaseAttemptThrottle]

    @swagger_auto_schema(
        operation_description="Price a subscription plan, apply an optional voucher and "
        "create a pending transaction with bank transfer instructions.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "plan_id": openapi.Schema(
                    type=openapi.TYPE_STRING, description="Subscription plan identifier"
                ),
                "voucher_code": voucher_code_param,
            },
            required=["plan_id"],
        ),
        responses={201: pricing_result_response, 400: "Rejected", 429: "Too many attempts"},
    )
    def post(self, request):
        serializer = SubscriptionPurchaseSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        try:
            result = TransactionAssembler().create_subscription_transaction(
                request.user,
                plan_id=serializer.validated_data["plan_id"],
                voucher_code=serializer.validated_data.get("voucher_code"),
            )
        except PricingError as exc:
            logger.info(f"Subscription purchase rejected for user {request.user.pk}: {exc.code}")
            return pricing_error_response(exc)

        return Response(
            {"message": "Transaction created", "data": result.to_dict()},
            status=status.HTTP_201_CREATED,
        )


class AddonPurchaseAPI(RateLimitedResponseMixin, APIView):
    """
    Create a pending add-on transaction for the authenticated user.
    """

    permission_classes = [IsAuthenticated]
    throttle_classes = [PurchaseAttemptThrottle]

    @swagger_auto_schema(
        operation_description="Price an add-on for the current subscription, apply an "
        "optional voucher and create a pending transaction.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "addon_type": openapi.Schema(
                    type=openapi.TYPE_STRING, description="Add-on product (extra_accounts)"
                ),
                "quantity": openapi.Schema(type=openapi.TYPE_INTEGER, description="1-20"),
                "duration_mode": openapi.Schema(
                    type=openapi.TYPE_STRING,
                    description="fixed_30_days or following_subscription",
                ),
                "voucher_code": voucher_code_param,
            },
            required=["quantity", "duration_mode"],
        ),
        responses={201: pricing_result_response, 400: "Rejected", 429: "Too many attempts"},
    )
    def post(self, request):
        serializer = AddonPurchaseSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        try:
            result = TransactionAssembler().create_addon_transaction(
                request.user,
                addon_type=data["addon_type"],
                quantity=data["quantity"],
                duration_mode=data["duration_mode"],
                voucher_code=data.get("voucher_code"),
            )
        except PricingError as exc:
            logger.info(f"Add-on purchase rejected for user {request.user.pk}: {exc.code}")
            return pricing_error_response(exc)

        return Response(
            {"message": "Transaction created", "data": result.to_dict()},
            status=status.HTTP_201_CREATED,
        )


class AddonQuoteAPI(APIView):
    """
    Price an add-on without creating a transaction.
    """

    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Quote an add-on purchase. Voucher problems are reported "
        "in voucher_error instead of failing the request.",
        manual_parameters=[
            openapi.Parameter("addon_type", openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter(
                "quantity", openapi.IN_QUERY, type=openapi.TYPE_INTEGER, required=True
            ),
            openapi.Parameter(
                "duration_mode", openapi.IN_QUERY, type=openapi.TYPE_STRING, required=True
            ),
            openapi.Parameter("voucher_code", openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ],
        responses={200: "Price breakdown"},
    )
    def get(self, request):
        serializer = AddonPurchaseSerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        try:
            quote = TransactionAssembler().quote_addon(
                request.user,
                addon_type=data["addon_type"],
                quantity=data["quantity"],
                duration_mode=data["duration_mode"],
                voucher_code=data.get("voucher_code"),
            )
        except PricingError as exc:
            return pricing_error_response(exc)

        return Response({"message": "Add-on price calculated", "data": quote})


class ValidateVoucherAPI(APIView):
    """
    Check a voucher code against an amount without recording usage.
    """

    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Validate a voucher code for a subscription or add-on amount.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "code": openapi.Schema(type=openapi.TYPE_STRING),
                "category": openapi.Schema(
                    type=openapi.TYPE_STRING, description="subscription or addon"
                ),
                "amount": openapi.Schema(
                    type=openapi.TYPE_INTEGER, description="Base amount in whole units"
                ),
                "plan_id": openapi.Schema(
                    type=openapi.TYPE_STRING,
                    description="Plan identifier (subscription vouchers)",
                ),
            },
            required=["code", "category", "amount"],
        ),
        responses={200: "Voucher is valid", 400: "Voucher rejected"},
    )
    @staticmethod
    def purchase_context(data) -> PurchaseContext:
        """Subscription vouchers see the plan's minimum-purchase basis, as at purchase."""
        basis = None
        if data["category"] == PurchaseCategory.SUBSCRIPTION.value:
            plan = SubscriptionPlan.objects.live().filter(plan_id=data["plan_id"]).first()
            if plan is None:
                raise PlanUnavailable(details={"plan_id": data["plan_id"]})
            basis = plan.minimum_purchase_basis

        return PurchaseContext(
            base_amount=data["amount"],
            plan_id=data["plan_id"],
            category=data["category"],
            now=timezone.now(),
            minimum_purchase_basis=basis,
        )

    def post(self, request):
        serializer = VoucherValidationSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        try:
            context = self.purchase_context(data)
            discount = VoucherResolver().resolve(data["code"], context)
        except PricingError as exc:
            return Response({"valid": False, **exc.to_dict()}, status=exc.http_status)

        return Response(
            {
                "message": "Voucher is valid",
                "data": {
                    "valid": True,
                    **discount.to_dict(),
                    "base_amount": data["amount"],
                    "amount_after_discount": data["amount"] - discount.discount_amount,
                },
            }
        )


class AffiliateVoucherLookupAPI(APIView):
    """
    Resolve a referral link's ``?ref=`` code to the affiliate's active voucher.
    """

    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Find the active affiliate voucher for a referral code. "
        "Channel suffixes such as PARTNER01_IG are accepted.",
        manual_parameters=[
            openapi.Parameter("ref", openapi.IN_QUERY, type=openapi.TYPE_STRING, required=True),
        ],
        responses={200: "Affiliate voucher", 404: "No affiliate or no active voucher"},
    )
    def get(self, request):
        serializer = AffiliateLookupSerializer(data=request.query_params)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        try:
            offer = VoucherResolver().lookup_affiliate_voucher(serializer.validated_data["ref"])
        except VoucherNotFound as exc:
            return Response(exc.to_dict(), status=status.HTTP_404_NOT_FOUND)
        except PricingError as exc:
            return pricing_error_response(exc)

        return Response({"message": "Affiliate voucher found", "data": offer.to_dict()})
