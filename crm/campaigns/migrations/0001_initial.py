import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Campaign",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("channel", models.CharField(choices=[("email", "Email"), ("sms", "SMS"), ("social", "Social"), ("event", "Event"), ("other", "Other")], default="email", max_length=16)),
                ("status", models.CharField(choices=[("planned", "Planned"), ("active", "Active"), ("paused", "Paused"), ("completed", "Completed")], db_index=True, default="planned", max_length=16)),
                ("budget", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("owner", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="owned_campaigns", to=settings.AUTH_USER_MODEL)),
            ],
            options={"db_table": "campaigns"},
        ),
    ]
