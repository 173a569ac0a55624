import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.local")

app = Celery("marketing_crm")
app.config_from_object("django.conf:settings", namespace="CELERY")

app.conf.imports = (
    "crm.common.tasks",
    "crm.subdealers.tasks",
)

app.autodiscover_tasks()
