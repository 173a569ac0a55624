from celery import shared_task
from django.conf import settings

from crm.common.ratelimit import prune_idle_buckets


@shared_task
def prune_rate_limit_buckets():
    return prune_idle_buckets(settings.RATE_LIMIT_BUCKET_IDLE_SECONDS)
