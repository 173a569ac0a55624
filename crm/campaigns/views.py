from django.db.models import Count
from rest_framework.decorators import action
from rest_framework.response import Response

from crm.campaigns.models import Campaign
from crm.campaigns.serializers import CampaignSerializer, CampaignWriteSerializer
from crm.common.viewsets import CrmModelViewSet


class CampaignViewSet(CrmModelViewSet):
    """
    /v1/campaigns/ CRUD. ?status= and ?channel= filter the list.
    """
    model = Campaign
    entity_type = "campaign"
    permission_prefix = "campaigns"
    serializer_class = CampaignSerializer
    write_serializer_class = CampaignWriteSerializer
    search_fields = ("name", "description")

    def filter_queryset_params(self, qs):
        for param in ("status", "channel"):
            val = (self.request.query_params.get(param) or "").strip()
            if val:
                qs = qs.filter(**{param: val})
        return qs

    @action(detail=True, methods=["get"])
    def stats(self, request, pk=None):
        """
        GET /v1/campaigns/{id}/stats
        Lead counts by status and conversion rate (converted / total).
        """
        campaign = self.get_object()
        rows = (
            campaign.leads.filter(deleted_at__isnull=True)
            .values("status")
            .annotate(n=Count("id"))
            .order_by()
        )
        by_status = {r["status"]: r["n"] for r in rows}
        total = sum(by_status.values())
        converted = by_status.get("converted", 0)

        return Response({
            "campaign_id": str(campaign.id),
            "leads_total": total,
            "leads_by_status": by_status,
            "conversion_rate": round(converted / total, 4) if total else 0,
        })
