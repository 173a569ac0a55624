from django.conf import settings
from django.db import models
from django.utils import timezone

from crm.iam.constants import ROLE_CHOICES, ROLE_DEFAULT_PERMISSIONS


class UserRole(models.Model):
    """
    CRM role and permission flags for a user.
    Copied into the session token at login; changes apply on the next login.
    """
    id = models.BigAutoField(primary_key=True)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="crm_role")
    role = models.CharField(max_length=32, choices=ROLE_CHOICES, db_index=True)
    permissions = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "user_roles"

    def __str__(self) -> str:
        return f"{self.user_id}:{self.role}"


def assign_role(user, role: str, permissions=None) -> UserRole:
    perms = sorted(set(permissions)) if permissions is not None else list(ROLE_DEFAULT_PERMISSIONS.get(role, []))
    obj, _ = UserRole.objects.update_or_create(
        user=user,
        defaults={"role": role, "permissions": perms, "updated_at": timezone.now()},
    )
    return obj
