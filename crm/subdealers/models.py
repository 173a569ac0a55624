import uuid

from django.db import models
from django.utils import timezone


class Subdealer(models.Model):
    """
    A registered subdealer. Only created after the phone is OTP-verified;
    phone and GST number are unique and never reassigned.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    phone = models.CharField(max_length=10, unique=True)
    gst_number = models.CharField(max_length=15, unique=True)

    legal_name = models.CharField(max_length=255)
    trade_name = models.CharField(max_length=255, blank=True, default="")

    address_building = models.CharField(max_length=255, blank=True, default="")
    address_street = models.CharField(max_length=255, blank=True, default="")
    address_locality = models.CharField(max_length=255, blank=True, default="")
    address_district = models.CharField(max_length=128, blank=True, default="")
    address_state = models.CharField(max_length=128, blank=True, default="")
    address_pincode = models.CharField(max_length=10, blank=True, default="")

    pan = models.CharField(max_length=10, blank=True, default="")
    business_type = models.CharField(max_length=128, blank=True, default="")
    # GST registration status as reported by the registry
    status = models.CharField(max_length=64, blank=True, default="")
    jurisdiction = models.CharField(max_length=255, blank=True, default="")
    registration_date = models.CharField(max_length=32, blank=True, default="")

    phone_verified = models.BooleanField(default=False)
    verified_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "subdealers"


class OtpChallenge(models.Model):
    id = models.BigAutoField(primary_key=True)

    phone = models.CharField(max_length=10, db_index=True)
    # HMAC of phone|code, never the code itself
    code_hash = models.CharField(max_length=64)
    expires_at = models.DateTimeField()
    attempt_count = models.PositiveIntegerField(default=0)
    consumed_at = models.DateTimeField(null=True, blank=True)

    subdealer = models.ForeignKey(
        "subdealers.Subdealer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="otp_challenges",
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "otp_challenges"
        indexes = [
            models.Index(fields=["phone", "created_at"], name="otp_phone_created_idx"),
        ]
