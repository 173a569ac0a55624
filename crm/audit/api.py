from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from crm.audit.models import AuditLog
from crm.common.pagination import page_params
from crm.iam.permissions import HasPermission


@api_view(["GET"])
@permission_classes([IsAuthenticated, HasPermission.with_perms("audit.view")])
def audit_logs(request):
    """
    GET /v1/audit/logs?entity_type=&entity_id=&action=
    """
    limit, offset = page_params(request)

    qs = AuditLog.objects.all().order_by("-created_at", "-id")
    for param in ("entity_type", "entity_id", "action"):
        val = (request.query_params.get(param) or "").strip()
        if val:
            qs = qs.filter(**{param: val})

    total = qs.count()
    return Response({
        "items": [
            {
                "action": a.action,
                "entity_type": a.entity_type,
                "entity_id": a.entity_id,
                "actor_user_id": a.actor_user_id,
                "data": a.data_json,
                "created_at": a.created_at,
            }
            for a in qs[offset: offset + limit]
        ],
        "page": {"limit": limit, "offset": offset, "total": total},
    })
