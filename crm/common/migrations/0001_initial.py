import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="RateLimitBucket",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("key", models.CharField(max_length=255, unique=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={"db_table": "rate_limit_buckets"},
        ),
        migrations.CreateModel(
            name="RateLimitHit",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("bucket", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="hits", to="common.ratelimitbucket")),
            ],
            options={"db_table": "rate_limit_hits"},
        ),
        migrations.AddIndex(
            model_name="ratelimithit",
            index=models.Index(fields=["bucket", "created_at"], name="rl_hits_bucket_created_idx"),
        ),
    ]
