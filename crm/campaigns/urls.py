from django.urls import path, include
from rest_framework.routers import DefaultRouter

from crm.campaigns.views import CampaignViewSet

router = DefaultRouter()
router.register(r"campaigns", CampaignViewSet, basename="campaigns")

urlpatterns = [
    path("", include(router.urls)),
]
