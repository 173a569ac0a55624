import logging

from django.db.models import Q
from opensearchpy.exceptions import OpenSearchException
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from crm.common.pagination import page_params
from crm.iam import constants as perms
from crm.iam.permissions import request_principal
from crm.iam.principal import require_permission
from crm.leads.models import Lead
from crm.leads.search import search_leads_os
from crm.leads.serializers import LeadListSerializer

logger = logging.getLogger(__name__)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def search_leads(request):
    """
    GET /v1/search/leads?q=...
    Headers: Authorization: Bearer <jwt>
    """
    principal = request_principal(request)
    require_permission(principal, perms.LEADS_VIEW)

    q = (request.query_params.get("q") or "").strip()
    if not q:
        return Response(
            {"success": False, "error": {"code": "VALIDATION_ERROR", "message": "q is required", "details": {}}},
            status=422,
        )

    limit, offset = page_params(request, default_limit=20, max_limit=50)
    owner_id = request.user.id if principal.role == perms.ROLE_SALES_REP else None

    # Prefer OpenSearch, fallback to the database
    try:
        total, docs = search_leads_os(query=q, limit=limit, offset=offset, owner_id=owner_id)
        return Response({"source": "opensearch", "items": docs, "page": {"limit": limit, "offset": offset, "total": total}})
    except (OpenSearchException, ConnectionError) as exc:
        logger.warning("search.opensearch_unavailable error=%s", exc)

    qs = Lead.objects.filter(deleted_at__isnull=True).filter(
        Q(name__icontains=q) | Q(email__icontains=q) | Q(phone__icontains=q) | Q(company__icontains=q)
    )
    if owner_id is not None:
        qs = qs.filter(owner_id=owner_id)
    qs = qs.order_by("-updated_at")

    total = qs.count()
    items = qs[offset: offset + limit]
    return Response({"source": "database", "items": LeadListSerializer(items, many=True).data, "page": {"limit": limit, "offset": offset, "total": total}})
