from django.apps import AppConfig


class SubdealersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "crm.subdealers"
