import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("campaigns", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Lead",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=32)),
                ("company", models.CharField(blank=True, default="", max_length=200)),
                ("source", models.CharField(choices=[("website", "Website"), ("referral", "Referral"), ("campaign", "Campaign"), ("event", "Event"), ("cold_call", "Cold call"), ("other", "Other")], db_index=True, default="other", max_length=20)),
                ("status", models.CharField(choices=[("new", "New"), ("contacted", "Contacted"), ("qualified", "Qualified"), ("unqualified", "Unqualified"), ("converted", "Converted")], db_index=True, default="new", max_length=20)),
                ("meta_json", models.JSONField(blank=True, default=dict)),
                ("converted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("campaign", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="leads", to="campaigns.campaign")),
                ("owner", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="owned_leads", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "leads",
                "indexes": [
                    models.Index(fields=["owner", "status"], name="leads_owner_status_idx"),
                    models.Index(fields=["campaign", "status"], name="leads_campaign_status_idx"),
                    models.Index(fields=["email"], name="leads_email_idx"),
                    models.Index(fields=["phone"], name="leads_phone_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LeadEvent",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("actor_user_id", models.BigIntegerField(blank=True, db_index=True, null=True)),
                ("type", models.CharField(db_index=True, max_length=64)),
                ("source", models.CharField(choices=[("system", "System"), ("dashboard", "Dashboard")], default="system", max_length=16)),
                ("data_json", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("lead", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="events", to="leads.lead")),
            ],
            options={
                "db_table": "lead_events",
                "indexes": [
                    models.Index(fields=["lead", "created_at"], name="lead_events_lead_created_idx"),
                    models.Index(fields=["type", "created_at"], name="lead_events_type_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LeadNote",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("body", models.TextField()),
                ("created_by_user_id", models.BigIntegerField(db_index=True)),
                ("updated_by_user_id", models.BigIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("lead", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notes", to="leads.lead")),
            ],
            options={
                "db_table": "lead_notes",
                "indexes": [
                    models.Index(fields=["lead", "created_at"], name="lead_notes_lead_created_idx"),
                ],
            },
        ),
    ]
