import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone


class Lead(models.Model):
    class Status(models.TextChoices):
        NEW = "new", "New"
        CONTACTED = "contacted", "Contacted"
        QUALIFIED = "qualified", "Qualified"
        UNQUALIFIED = "unqualified", "Unqualified"
        CONVERTED = "converted", "Converted"

    class Source(models.TextChoices):
        WEBSITE = "website", "Website"
        REFERRAL = "referral", "Referral"
        CAMPAIGN = "campaign", "Campaign"
        EVENT = "event", "Event"
        COLD_CALL = "cold_call", "Cold call"
        OTHER = "other", "Other"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    company = models.CharField(max_length=200, blank=True, default="")

    source = models.CharField(max_length=20, choices=Source.choices, default=Source.OTHER, db_index=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW, db_index=True)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="owned_leads",
    )
    campaign = models.ForeignKey(
        "campaigns.Campaign",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="leads",
    )

    meta_json = models.JSONField(default=dict, blank=True)

    converted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        db_table = "leads"
        indexes = [
            models.Index(fields=["owner", "status"], name="leads_owner_status_idx"),
            models.Index(fields=["campaign", "status"], name="leads_campaign_status_idx"),
            models.Index(fields=["email"], name="leads_email_idx"),
            models.Index(fields=["phone"], name="leads_phone_idx"),
        ]

    def soft_delete(self):
        if not self.deleted_at:
            now = timezone.now()
            self.deleted_at = now
            self.updated_at = now
            self.save(update_fields=["deleted_at", "updated_at"])

    def touch(self):
        self.updated_at = timezone.now()
        self.save()


class LeadEvent(models.Model):
    """
    Immutable-ish event stream for a Lead.
    Avoid updates; create new events instead.
    """

    class Source(models.TextChoices):
        SYSTEM = "system", "System"
        DASHBOARD = "dashboard", "Dashboard"

    id = models.BigAutoField(primary_key=True)

    lead = models.ForeignKey("leads.Lead", on_delete=models.CASCADE, related_name="events")

    # who caused it (null for system)
    actor_user_id = models.BigIntegerField(null=True, blank=True, db_index=True)

    # machine-readable type
    type = models.CharField(max_length=64, db_index=True)

    source = models.CharField(max_length=16, choices=Source.choices, default=Source.SYSTEM)

    # flexible payload; do not store raw secrets
    data_json = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "lead_events"
        indexes = [
            models.Index(fields=["lead", "created_at"], name="lead_events_lead_created_idx"),
            models.Index(fields=["type", "created_at"], name="lead_events_type_created_idx"),
        ]


class LeadNote(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    lead = models.ForeignKey("leads.Lead", on_delete=models.CASCADE, related_name="notes")

    body = models.TextField()

    created_by_user_id = models.BigIntegerField(db_index=True)
    updated_by_user_id = models.BigIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        db_table = "lead_notes"
        indexes = [
            models.Index(fields=["lead", "created_at"], name="lead_notes_lead_created_idx"),
        ]

    def soft_delete(self):
        now = timezone.now()
        self.deleted_at = now
        self.updated_at = now
        self.save(update_fields=["deleted_at", "updated_at"])
