from django.db.models import Count
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from crm.accounts.models import Account
from crm.campaigns.models import Campaign
from crm.contacts.models import Contact
from crm.iam import constants as perms
from crm.iam.permissions import request_principal
from crm.iam.principal import require_permission
from crm.leads.models import Lead
from crm.subdealers.models import Subdealer


def _count_by(qs, field: str) -> dict:
    rows = qs.values(field).annotate(n=Count("id")).order_by()
    return {str(r[field]): r["n"] for r in rows}


def _live(model):
    return model.objects.filter(deleted_at__isnull=True)


def _org_totals() -> dict:
    leads = _live(Lead)
    return {
        "leads_total": leads.count(),
        "leads_by_status": _count_by(leads, "status"),
        "contacts_total": _live(Contact).count(),
        "accounts_total": _live(Account).count(),
        "campaigns_by_status": _count_by(_live(Campaign), "status"),
        "subdealers_total": Subdealer.objects.count(),
    }


def _leads_per_owner() -> list:
    rows = (
        _live(Lead)
        .values("owner_id", "owner__email")
        .annotate(n=Count("id"))
        .order_by("-n")
    )
    return [{"owner_id": r["owner_id"], "owner_email": r["owner__email"] or "", "leads": r["n"]} for r in rows]


def _rep_view(user_id: int) -> dict:
    leads = _live(Lead).filter(owner_id=user_id)
    return {
        "leads_total": leads.count(),
        "leads_by_status": _count_by(leads, "status"),
        "contacts_total": _live(Contact).filter(owner_id=user_id).count(),
    }


def _marketing_view() -> dict:
    campaigns = _live(Campaign)
    leads = _live(Lead)
    converted = leads.filter(status=Lead.Status.CONVERTED).count()
    total = leads.count()
    return {
        "campaigns_by_status": _count_by(campaigns, "status"),
        "campaigns_by_channel": _count_by(campaigns, "channel"),
        "leads_by_source": _count_by(leads, "source"),
        "leads_from_campaigns": leads.filter(campaign__isnull=False).count(),
        "conversion_rate": round(converted / total, 4) if total else 0,
    }


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """
    GET /v1/dashboard

    The payload depends on the caller's role:
      system_admin / admin: organisation totals
      sales_manager: organisation totals plus leads per owner
      sales_rep: own leads and contacts
      marketing: campaign and lead-source breakdowns
    """
    principal = request_principal(request)
    require_permission(principal, perms.DASHBOARD_VIEW)

    role = principal.role
    if role in (perms.ROLE_SYSTEM_ADMIN, perms.ROLE_ADMIN):
        data = _org_totals()
    elif role == perms.ROLE_SALES_MANAGER:
        data = {**_org_totals(), "leads_per_owner": _leads_per_owner()}
    elif role == perms.ROLE_SALES_REP:
        data = _rep_view(request.user.id)
    else:
        data = _marketing_view()

    return Response({"role": role, "data": data})
