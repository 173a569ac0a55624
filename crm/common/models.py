from django.db import models
from django.utils import timezone


class RateLimitBucket(models.Model):
    """
    One row per (operation, identifier). Locked while its window is evaluated,
    so concurrent requests for the same key are serialised.
    """
    id = models.BigAutoField(primary_key=True)
    key = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "rate_limit_buckets"


class RateLimitHit(models.Model):
    """
    One admitted request inside a sliding window.
    Used when RATE_LIMIT_BACKEND=database; hits older than the window are pruned on access.
    """
    id = models.BigAutoField(primary_key=True)
    bucket = models.ForeignKey(RateLimitBucket, on_delete=models.CASCADE, related_name="hits")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "rate_limit_hits"
        indexes = [models.Index(fields=["bucket", "created_at"], name="rl_hits_bucket_created_idx")]
