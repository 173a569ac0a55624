import logging

from django.http import JsonResponse
from django.db import connection
from django.conf import settings
from opensearchpy import OpenSearch

from crm.common.redis_client import get_redis

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Database is required; redis and opensearch are reported but only degrade the status.
    """
    checks = {"db": False, "redis": False, "opensearch": False}

    try:
        with connection.cursor() as c:
            c.execute("SELECT 1")
        checks["db"] = True
    except Exception:
        logger.exception("health.db_unreachable")

    try:
        get_redis().ping()
        checks["redis"] = True
    except Exception:
        logger.warning("health.redis_unreachable")

    try:
        OpenSearch(settings.OPENSEARCH_URL).info()
        checks["opensearch"] = True
    except Exception:
        logger.warning("health.opensearch_unreachable")

    if not checks["db"]:
        overall = "down"
    elif all(checks.values()):
        overall = "ok"
    else:
        overall = "degraded"

    return JsonResponse({"status": overall, "checks": checks}, status=200 if checks["db"] else 503)
