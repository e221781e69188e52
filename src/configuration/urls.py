"""
URL configuration for the settlement engine.

Billing endpoints live under /api/billing/; the OpenAPI schema is generated
from those patterns only.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path, re_path
from django.views.generic import RedirectView
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

api_urlpatterns = [
    path("api/billing/", include("billing.apis.purchase.urls")),
]

schema_view = get_schema_view(
    openapi.Info(
        title="Settlement Engine API",
        default_version="v1",
        description="Pricing, voucher redemption and manual transfer settlement.",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
    patterns=api_urlpatterns,
)

urlpatterns = [
    *api_urlpatterns,
    path("admin/", admin.site.urls),
    re_path(
        r"^swagger(?P<format>\.json|\.yaml)$",
        schema_view.without_ui(cache_timeout=0),
        name="schema-json",
    ),
    path(
        "swagger/",
        schema_view.with_ui("swagger", cache_timeout=0),
        name="schema-swagger-ui",
    ),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    path("", RedirectView.as_view(url="/swagger/", permanent=False)),
]

urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
