from django.urls import path
from crm.subdealers.views import (
    fetch_gst,
    generate_otp,
    verify_otp,
    subdealers_list,
    subdealers_detail,
)

urlpatterns = [
    path("subdealer/fetch-gst", fetch_gst, name="subdealer-fetch-gst"),
    path("subdealer/generate-otp", generate_otp, name="subdealer-generate-otp"),
    path("subdealer/verify-otp", verify_otp, name="subdealer-verify-otp"),
    path("subdealers", subdealers_list, name="subdealers-list"),
    path("subdealers/<uuid:subdealer_id>", subdealers_detail, name="subdealers-detail"),
]
