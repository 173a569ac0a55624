import logging
import math
import time
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from crm.common.errors import RateLimited
from crm.common.lua_scripts import LUA_SLIDING_WINDOW
from crm.common.models import RateLimitBucket, RateLimitHit
from crm.common.redis_client import get_redis

logger = logging.getLogger(__name__)


def rate_limit_key(operation: str, identifier: str) -> str:
    return f"rl:{operation}:{(identifier or '').strip()}"


def _redis_allow(key: str, limit: int, window_seconds: int):
    """
    Sliding window on a sorted set, evaluated atomically in Lua.
    Returns (allowed, retry_after_seconds).
    """
    r = get_redis()
    now_ms = int(time.time() * 1000)
    member = f"{now_ms}-{uuid.uuid4().hex[:8]}"
    count, reset_ms, allowed = r.eval(LUA_SLIDING_WINDOW, 1, key, window_seconds * 1000, limit, now_ms, member)
    retry_after = max(1, math.ceil(int(reset_ms) / 1000.0))
    return int(allowed) == 1, retry_after


def _database_allow(key: str, limit: int, window_seconds: int):
    """
    Same sliding window, kept as rows in the relational store.
    Returns (allowed, retry_after_seconds).
    """
    now = timezone.now()
    window_start = now - timedelta(seconds=window_seconds)

    with transaction.atomic():
        bucket, _ = RateLimitBucket.objects.select_for_update().get_or_create(key=key)
        RateLimitHit.objects.filter(bucket=bucket, created_at__lte=window_start).delete()

        hits = list(
            RateLimitHit.objects.filter(bucket=bucket)
            .order_by("created_at")
            .values_list("created_at", flat=True)
        )
        if len(hits) >= limit:
            reset = (hits[0] + timedelta(seconds=window_seconds)) - now
            return False, max(1, math.ceil(reset.total_seconds()))

        RateLimitHit.objects.create(bucket=bucket, created_at=now)
        return True, 0


def rate_limit_or_raise(*, operation: str, identifier: str, limit: int, window_seconds: int) -> None:
    """
    Admit one request for (operation, identifier) or raise RateLimited.
    Rejected requests are not counted against the window.
    """
    key = rate_limit_key(operation, identifier)
    backend = getattr(settings, "RATE_LIMIT_BACKEND", "redis")

    if backend == "database":
        allowed, retry_after = _database_allow(key, limit, window_seconds)
    else:
        allowed, retry_after = _redis_allow(key, limit, window_seconds)

    if not allowed:
        logger.info("rate_limit.rejected operation=%s retry_after=%s", operation, retry_after)
        raise RateLimited(retry_after_seconds=retry_after)


def prune_idle_buckets(idle_seconds: int = 3600) -> int:
    """
    Delete database buckets with no hits in the last `idle_seconds`.
    Returns the number of buckets removed.
    """
    cutoff = timezone.now() - timedelta(seconds=idle_seconds)
    idle = RateLimitBucket.objects.filter(created_at__lt=cutoff).exclude(hits__created_at__gte=cutoff)
    _, per_model = idle.delete()
    removed = per_model.get(RateLimitBucket._meta.label, 0)
    if removed:
        logger.info("rate_limit.pruned buckets=%s", removed)
    return removed
