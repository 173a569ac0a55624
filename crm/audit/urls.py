from django.urls import path
from crm.audit.api import audit_logs

urlpatterns = [
    path("audit/logs", audit_logs, name="audit-logs"),
]
