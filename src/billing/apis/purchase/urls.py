from django.urls import path

from billing.apis.purchase.apis import (
    AddonPurchaseAPI,
    AddonQuoteAPI,
    AffiliateVoucherLookupAPI,
    SubscriptionPurchaseAPI,
    ValidateVoucherAPI,
)

urlpatterns = [
    path(
        "subscriptions/purchase/",
        SubscriptionPurchaseAPI.as_view(),
        name="purchase_subscription",
    ),
    path("addons/purchase/", AddonPurchaseAPI.as_view(), name="purchase_addon"),
    path("addons/quote/", AddonQuoteAPI.as_view(), name="quote_addon"),
    path("vouchers/validate/", ValidateVoucherAPI.as_view(), name="validate_voucher"),
    path(
        "vouchers/affiliate-lookup/",
        AffiliateVoucherLookupAPI.as_view(),
        name="affiliate_voucher_lookup",
    ),
]
