from functools import lru_cache

from django.conf import settings

import redis


@lru_cache(maxsize=None)
def _client_for(url: str) -> redis.Redis:
    return redis.Redis.from_url(url, decode_responses=True)


def get_redis() -> redis.Redis:
    """
    Shared client for settings.REDIS_URL; one connection pool per URL per process.
    Used by the rate limiter and the health check.
    """
    url = getattr(settings, "REDIS_URL", None) or "redis://localhost:6379/0"
    return _client_for(url)
