import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Subdealer",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("phone", models.CharField(max_length=10, unique=True)),
                ("gst_number", models.CharField(max_length=15, unique=True)),
                ("legal_name", models.CharField(max_length=255)),
                ("trade_name", models.CharField(blank=True, default="", max_length=255)),
                ("address_building", models.CharField(blank=True, default="", max_length=255)),
                ("address_street", models.CharField(blank=True, default="", max_length=255)),
                ("address_locality", models.CharField(blank=True, default="", max_length=255)),
                ("address_district", models.CharField(blank=True, default="", max_length=128)),
                ("address_state", models.CharField(blank=True, default="", max_length=128)),
                ("address_pincode", models.CharField(blank=True, default="", max_length=10)),
                ("pan", models.CharField(blank=True, default="", max_length=10)),
                ("business_type", models.CharField(blank=True, default="", max_length=128)),
                ("status", models.CharField(blank=True, default="", max_length=64)),
                ("jurisdiction", models.CharField(blank=True, default="", max_length=255)),
                ("registration_date", models.CharField(blank=True, default="", max_length=32)),
                ("phone_verified", models.BooleanField(default=False)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={"db_table": "subdealers"},
        ),
        migrations.CreateModel(
            name="OtpChallenge",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("phone", models.CharField(db_index=True, max_length=10)),
                ("code_hash", models.CharField(max_length=64)),
                ("expires_at", models.DateTimeField()),
                ("attempt_count", models.PositiveIntegerField(default=0)),
                ("consumed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("subdealer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="otp_challenges", to="subdealers.subdealer")),
            ],
            options={
                "db_table": "otp_challenges",
                "indexes": [models.Index(fields=["phone", "created_at"], name="otp_phone_created_idx")],
            },
        ),
    ]
