from django.urls import path
from crm.dashboard.views import dashboard

urlpatterns = [
    path("dashboard", dashboard, name="dashboard"),
]
