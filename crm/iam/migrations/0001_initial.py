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
            name="UserRole",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("role", models.CharField(choices=[("system_admin", "System admin"), ("admin", "Admin"), ("sales_manager", "Sales manager"), ("sales_rep", "Sales rep"), ("marketing", "Marketing")], db_index=True, max_length=32)),
                ("permissions", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="crm_role", to=settings.AUTH_USER_MODEL)),
            ],
            options={"db_table": "user_roles"},
        ),
    ]
