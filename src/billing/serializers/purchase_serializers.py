from rest_framework import serializers

from billing.models import AddonType, DurationMode, PurchaseCategory


class VoucherCodeField(serializers.CharField):
    """Optional voucher code, trimmed and upper-cased."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("allow_null", True)
        kwargs.setdefault("max_length", 50)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return value.strip().upper() or None


class SubscriptionPurchaseSerializer(serializers.Serializer):
    plan_id = serializers.CharField(max_length=64)
    voucher_code = VoucherCodeField()


class AddonPurchaseSerializer(serializers.Serializer):
    addon_type = serializers.ChoiceField(
        choices=AddonType.choices(), default=AddonType.EXTRA_ACCOUNTS.value
    )
    quantity = serializers.IntegerField(min_value=1)
    duration_mode = serializers.ChoiceField(choices=DurationMode.choices())
    voucher_code = VoucherCodeField()


class VoucherValidationSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)
    category = serializers.ChoiceField(choices=PurchaseCategory.choices())
    amount = serializers.IntegerField(min_value=0)
    plan_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")

    def validate(self, data):
        if data["category"] == PurchaseCategory.SUBSCRIPTION.value and not data["plan_id"]:
            raise serializers.ValidationError(
                {"plan_id": "plan_id is required for subscription vouchers."}
            )
        return data


class AffiliateLookupSerializer(serializers.Serializer):
    ref = serializers.CharField(max_length=100)
