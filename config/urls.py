from django.contrib import admin
from django.urls import path, include
from django.shortcuts import redirect
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from crm.common.views import health_check

urlpatterns = [
    # Root -> API docs
    path("", lambda request: redirect("/api/docs/")),

    path("admin/", admin.site.urls),

    # not under /v1
    path("health/", health_check, name="health-check"),

    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    path("v1/", include("crm.iam.urls")),
    path("v1/", include("crm.audit.urls")),
    path("v1/", include("crm.accounts.urls")),
    path("v1/", include("crm.contacts.urls")),
    path("v1/", include("crm.campaigns.urls")),
    path("v1/", include("crm.leads.urls")),
    path("v1/", include("crm.dashboard.urls")),
    path("v1/", include("crm.search.urls")),
    path("v1/", include("crm.subdealers.urls")),
]
