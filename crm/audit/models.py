from django.db import models
from django.utils import timezone


class AuditLog(models.Model):
    id = models.BigAutoField(primary_key=True)

    actor_user_id = models.BigIntegerField(null=True, blank=True, db_index=True)

    action = models.CharField(max_length=64, db_index=True)
    entity_type = models.CharField(max_length=64)
    entity_id = models.CharField(max_length=64)

    data_json = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "audit_logs"
        indexes = [models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx")]
