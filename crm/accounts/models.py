import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class Account(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    industry = models.CharField(max_length=100, blank=True, default="")
    website = models.URLField(blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    state = models.CharField(max_length=100, blank=True, default="")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="owned_accounts",
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        db_table = "accounts"
        indexes = [models.Index(fields=["name"], name="accounts_name_idx")]

    def __str__(self) -> str:
        return self.name

    def soft_delete(self):
        if not self.deleted_at:
            now = timezone.now()
            self.deleted_at = now
            self.updated_at = now
            self.save(update_fields=["deleted_at", "updated_at"])
