from datetime import timedelta

import pytest
from django.utils import timezone

from crm.common import ratelimit
from crm.common.errors import RateLimited
from crm.common.models import RateLimitBucket, RateLimitHit
from crm.common.ratelimit import prune_idle_buckets, rate_limit_key, rate_limit_or_raise
from crm.common.redis_client import get_redis


def _hit(identifier="9876543210", limit=3, window_seconds=60):
    rate_limit_or_raise(operation="otp_issue", identifier=identifier, limit=limit, window_seconds=window_seconds)


@pytest.mark.django_db
def test_database_backend_admits_up_to_limit():
    for _ in range(3):
        _hit()

    with pytest.raises(RateLimited) as exc:
        _hit()
    assert 0 < exc.value.retry_after_seconds <= 60
    assert exc.value.details == {"retry_after": exc.value.retry_after_seconds}


@pytest.mark.django_db
def test_rejected_requests_are_not_counted():
    for _ in range(3):
        _hit()
    for _ in range(3):
        with pytest.raises(RateLimited):
            _hit()

    bucket = RateLimitBucket.objects.get(key=rate_limit_key("otp_issue", "9876543210"))
    assert RateLimitHit.objects.filter(bucket=bucket).count() == 3


@pytest.mark.django_db
def test_window_slides():
    for _ in range(3):
        _hit()

    bucket = RateLimitBucket.objects.get(key=rate_limit_key("otp_issue", "9876543210"))
    oldest = RateLimitHit.objects.filter(bucket=bucket).order_by("created_at").first()
    RateLimitHit.objects.filter(pk=oldest.pk).update(created_at=timezone.now() - timedelta(seconds=61))

    _hit()
    with pytest.raises(RateLimited):
        _hit()


@pytest.mark.django_db
def test_keys_are_independent():
    for _ in range(3):
        _hit("9876543210")
    _hit("9123456780")
    rate_limit_or_raise(operation="otp_verify", identifier="9876543210", limit=3, window_seconds=60)


class _FakeRedis:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def eval(self, script, numkeys, *args):
        self.calls.append((numkeys, args))
        return self.result


def test_redis_backend_uses_sliding_window_script(settings, monkeypatch):
    settings.RATE_LIMIT_BACKEND = "redis"
    fake = _FakeRedis([1, 60000, 1])
    monkeypatch.setattr(ratelimit, "get_redis", lambda: fake)

    _hit()

    numkeys, args = fake.calls[0]
    assert numkeys == 1
    assert args[0] == "rl:otp_issue:9876543210"
    assert args[1] == 60000
    assert args[2] == 3


def test_redis_backend_rejection(settings, monkeypatch):
    settings.RATE_LIMIT_BACKEND = "redis"
    monkeypatch.setattr(ratelimit, "get_redis", lambda: _FakeRedis([3, 12500, 0]))

    with pytest.raises(RateLimited) as exc:
        _hit()
    assert exc.value.retry_after_seconds == 13


def test_get_redis_reuses_one_client_per_url(settings):
    settings.REDIS_URL = "redis://localhost:6379/5"
    first = get_redis()
    assert get_redis() is first
    assert first.connection_pool is get_redis().connection_pool

    settings.REDIS_URL = "redis://localhost:6379/6"
    assert get_redis() is not first


@pytest.mark.django_db
def test_prune_idle_buckets_keeps_active_windows():
    _hit("junk-1")
    _hit("9876543210")
    _hit("9123456780")
    two_hours_ago = timezone.now() - timedelta(hours=2)
    RateLimitBucket.objects.update(created_at=two_hours_ago)
    RateLimitHit.objects.filter(bucket__key=rate_limit_key("otp_issue", "junk-1")).update(created_at=two_hours_ago)
    RateLimitHit.objects.filter(bucket__key=rate_limit_key("otp_issue", "9123456780")).update(created_at=two_hours_ago)
    _hit("9123456780")
    _hit("fresh")

    assert prune_idle_buckets(3600) == 1

    keys = set(RateLimitBucket.objects.values_list("key", flat=True))
    assert keys == {
        rate_limit_key("otp_issue", k) for k in ("9876543210", "9123456780", "fresh")
    }
    assert not RateLimitHit.objects.filter(bucket__key=rate_limit_key("otp_issue", "junk-1")).exists()


@pytest.mark.django_db
def test_pruned_key_starts_a_new_window():
    for _ in range(3):
        _hit()
    RateLimitBucket.objects.update(created_at=timezone.now() - timedelta(hours=2))
    RateLimitHit.objects.update(created_at=timezone.now() - timedelta(hours=2))

    assert prune_idle_buckets(3600) == 1
    _hit()
    assert RateLimitHit.objects.count() == 1
