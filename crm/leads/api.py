import logging
import uuid

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from crm.accounts.models import Account
from crm.audit.utils import audit
from crm.common.errors import Conflict, NotFound
from crm.common.pagination import page_params, paginated
from crm.contacts.models import Contact
from crm.iam import constants as perms
from crm.iam.permissions import request_principal
from crm.iam.principal import require_permission
from crm.leads.events import record_lead_event
from crm.leads.models import Lead, LeadEvent, LeadNote
from crm.leads.serializers import (
    LeadConvertSerializer,
    LeadCreateSerializer,
    LeadDetailSerializer,
    LeadEventSerializer,
    LeadListSerializer,
    LeadNoteSerializer,
    LeadNoteWriteSerializer,
    LeadQualifySerializer,
    LeadUpdateSerializer,
)

logger = logging.getLogger(__name__)


def _visible_leads(request):
    """
    Sales reps only see leads they own.
    """
    qs = Lead.objects.filter(deleted_at__isnull=True)
    principal = request_principal(request)
    if principal and principal.role == perms.ROLE_SALES_REP:
        qs = qs.filter(owner_id=request.user.id)
    return qs


def _get_lead(request, lead_id) -> Lead:
    lead = _visible_leads(request).filter(id=lead_id).first()
    if not lead:
        raise NotFound("Lead not found")
    return lead


def _snapshot(lead: Lead) -> dict:
    return {
        "name": lead.name or "",
        "email": lead.email or "",
        "phone": lead.phone or "",
        "company": lead.company or "",
        "status": lead.status or "",
        "owner_id": lead.owner_id,
        "meta_keys": sorted((lead.meta_json or {}).keys()),
    }


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def leads_list(request):
    """
    GET /v1/leads
    Query:
      status, source, owner_id, campaign_id (optional exact filters)
      q=<search optional: name/email/phone/company>
      limit=<int optional, default 50, max 200>
      offset=<int optional, default 0>

    POST /v1/leads
    """
    principal = request_principal(request)

    if request.method == "POST":
        require_permission(principal, perms.LEADS_CREATE)
        s = LeadCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)
        if principal.role == perms.ROLE_SALES_REP or "owner" not in data:
            data["owner"] = request.user

        lead = Lead.objects.create(**data)
        audit("lead.created", "lead", lead.id, actor_user_id=request.user.id)
        return Response({"lead": LeadDetailSerializer(lead).data}, status=status.HTTP_201_CREATED)

    require_permission(principal, perms.LEADS_VIEW)
    limit, offset = page_params(request)

    qs = _visible_leads(request).order_by("-created_at")

    for param in ("status", "source"):
        val = (request.query_params.get(param) or "").strip()
        if val:
            qs = qs.filter(**{param: val})

    owner_id = (request.query_params.get("owner_id") or "").strip()
    if owner_id.isdigit():
        qs = qs.filter(owner_id=int(owner_id))

    campaign_id = (request.query_params.get("campaign_id") or "").strip()
    if campaign_id:
        qs = qs.filter(campaign_id=campaign_id) if _is_uuid(campaign_id) else qs.none()

    q = (request.query_params.get("q") or "").strip()
    if q:
        qs = qs.filter(
            Q(name__icontains=q) |
            Q(email__icontains=q) |
            Q(phone__icontains=q) |
            Q(company__icontains=q)
        )

    return Response(paginated(qs, LeadListSerializer, limit=limit, offset=offset))


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


@api_view(["GET", "PATCH", "DELETE"])
@permission_classes([IsAuthenticated])
def leads_detail(request, lead_id):
    """
    GET /v1/leads/{lead_id}
    PATCH /v1/leads/{lead_id}
    DELETE /v1/leads/{lead_id}   (soft delete)
    """
    principal = request_principal(request)

    if request.method == "GET":
        require_permission(principal, perms.LEADS_VIEW)
        return Response({"lead": LeadDetailSerializer(_get_lead(request, lead_id)).data})

    if request.method == "DELETE":
        require_permission(principal, perms.LEADS_DELETE)
        lead = _get_lead(request, lead_id)
        with transaction.atomic():
            lead.soft_delete()
            record_lead_event(lead=lead, event_type="lead.deleted", source="dashboard", actor_user_id=request.user.id)
            audit("lead.deleted", "lead", lead.id, actor_user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    require_permission(principal, perms.LEADS_EDIT)
    lead = _get_lead(request, lead_id)

    s = LeadUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    if not data:
        return Response({"lead": LeadDetailSerializer(lead).data})

    if lead.status == Lead.Status.CONVERTED:
        raise Conflict("Converted leads cannot be edited", code="ALREADY_CONVERTED")

    before = _snapshot(lead)
    meta_patch_keys = []

    for field in ("name", "email", "phone", "company", "source", "status"):
        if field in data:
            setattr(lead, field, data[field])

    if "owner_id" in data:
        owner_id = data["owner_id"]
        if owner_id is not None and not get_user_model().objects.filter(id=owner_id, is_active=True).exists():
            raise NotFound("Owner not found")
        lead.owner_id = owner_id

    if "meta" in data:
        patch = data.get("meta") or {}
        meta_patch_keys = sorted(patch.keys())
        lead.meta_json = {**(lead.meta_json or {}), **patch}

    # Save + event in one transaction to avoid timeline inconsistencies
    with transaction.atomic():
        lead.touch()
        record_lead_event(
            lead=lead,
            event_type="lead.updated",
            source="dashboard",
            actor_user_id=request.user.id,
            data={"before": before, "after": _snapshot(lead), "meta_patch_keys": meta_patch_keys},
        )
        audit("lead.updated", "lead", lead.id, actor_user_id=request.user.id, data={"fields": sorted(data.keys())})

    return Response({"lead": LeadDetailSerializer(lead).data})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def lead_qualify(request, lead_id):
    """
    POST /v1/leads/{lead_id}/qualify
    Body: { "decision": "qualified" | "unqualified", "remarks": "optional" }

    Remarks are validated but not persisted; the event only notes whether they were given.
    """
    require_permission(request_principal(request), perms.LEADS_QUALIFY)
    lead = _get_lead(request, lead_id)

    s = LeadQualifySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    decision = s.validated_data["decision"]
    remarks = (s.validated_data.get("remarks") or "").strip()

    if lead.status == Lead.Status.CONVERTED:
        raise Conflict("Lead is already converted", code="ALREADY_CONVERTED")

    previous = lead.status
    with transaction.atomic():
        lead.status = decision
        lead.touch()
        record_lead_event(
            lead=lead,
            event_type="lead.qualified" if decision == Lead.Status.QUALIFIED else "lead.disqualified",
            source="dashboard",
            actor_user_id=request.user.id,
            data={"from": previous, "to": decision, "remarks_provided": bool(remarks)},
        )
        audit("lead.qualified", "lead", lead.id, actor_user_id=request.user.id, data={"decision": decision})

    return Response({"lead": LeadDetailSerializer(lead).data})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def lead_convert(request, lead_id):
    """
    POST /v1/leads/{lead_id}/convert
    Body: { "account_id": "<uuid optional>", "create_account": true }

    Creates a Contact from the lead. The contact is attached to account_id when given,
    otherwise to an account matching the lead's company (created if missing and create_account).
    """
    principal = request_principal(request)
    require_permission(principal, perms.LEADS_EDIT)
    require_permission(principal, perms.CONTACTS_CREATE)

    s = LeadConvertSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    with transaction.atomic():
        lead = _visible_leads(request).select_for_update().filter(id=lead_id).first()
        if not lead:
            raise NotFound("Lead not found")
        if lead.status == Lead.Status.CONVERTED:
            raise Conflict("Lead is already converted", code="ALREADY_CONVERTED")
        if lead.status == Lead.Status.UNQUALIFIED:
            raise Conflict("Unqualified leads cannot be converted", code="LEAD_UNQUALIFIED")

        account = None
        account_created = False
        if data.get("account_id"):
            account = Account.objects.filter(id=data["account_id"], deleted_at__isnull=True).first()
            if not account:
                raise NotFound("Account not found")
        elif lead.company:
            account = Account.objects.filter(name__iexact=lead.company, deleted_at__isnull=True).first()
            if not account and data.get("create_account", True):
                require_permission(principal, perms.ACCOUNTS_CREATE)
                account = Account.objects.create(
                    name=lead.company,
                    email=lead.email,
                    phone=lead.phone,
                    owner_id=lead.owner_id or request.user.id,
                )
                account_created = True
                audit("account.created", "account", account.id, actor_user_id=request.user.id, data={"from_lead": str(lead.id)})

        first, _, last = (lead.name or "").partition(" ")
        contact = Contact.objects.create(
            first_name=first or lead.name,
            last_name=last.strip(),
            email=lead.email,
            phone=lead.phone,
            account=account,
            source_lead=lead,
            owner_id=lead.owner_id or request.user.id,
        )

        lead.status = Lead.Status.CONVERTED
        lead.converted_at = timezone.now()
        lead.touch()

        record_lead_event(
            lead=lead,
            event_type="lead.converted",
            source="dashboard",
            actor_user_id=request.user.id,
            data={
                "contact_id": str(contact.id),
                "account_id": str(account.id) if account else None,
                "account_created": account_created,
            },
        )
        audit("lead.converted", "lead", lead.id, actor_user_id=request.user.id, data={"contact_id": str(contact.id)})

    logger.info("leads.converted lead_id=%s contact_id=%s", lead.id, contact.id)
    return Response(
        {
            "lead": LeadDetailSerializer(lead).data,
            "contact": {"id": str(contact.id), "full_name": contact.full_name},
            "account": {"id": str(account.id), "name": account.name, "created": account_created} if account else None,
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def lead_timeline(request, lead_id):
    """
    GET /v1/leads/{lead_id}/timeline
    Query:
      limit=<int optional, default 50, max 200>
      offset=<int optional, default 0>
      type=<optional exact match filter>
    """
    require_permission(request_principal(request), perms.LEADS_VIEW)
    lead = _get_lead(request, lead_id)
    limit, offset = page_params(request)

    qs = LeadEvent.objects.filter(lead=lead).order_by("-created_at", "-id")
    event_type = (request.query_params.get("type") or "").strip()
    if event_type:
        qs = qs.filter(type=event_type)

    return Response(paginated(qs, LeadEventSerializer, limit=limit, offset=offset))


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def lead_notes(request, lead_id):
    """
    GET /v1/leads/{lead_id}/notes
    POST /v1/leads/{lead_id}/notes   Body: { "body": "..." }
    """
    principal = request_principal(request)

    if request.method == "GET":
        require_permission(principal, perms.LEADS_VIEW)
        lead = _get_lead(request, lead_id)
        limit, offset = page_params(request)
        qs = LeadNote.objects.filter(lead=lead, deleted_at__isnull=True).order_by("-created_at")
        return Response(paginated(qs, LeadNoteSerializer, limit=limit, offset=offset))

    require_permission(principal, perms.LEADS_EDIT)
    lead = _get_lead(request, lead_id)

    s = LeadNoteWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)

    with transaction.atomic():
        note = LeadNote.objects.create(lead=lead, body=s.validated_data["body"], created_by_user_id=request.user.id)
        record_lead_event(
            lead=lead,
            event_type="lead.note.created",
            source="dashboard",
            actor_user_id=request.user.id,
            data={"note_id": str(note.id)},
        )

    return Response({"note": LeadNoteSerializer(note).data}, status=status.HTTP_201_CREATED)


@api_view(["PATCH", "DELETE"])
@permission_classes([IsAuthenticated])
def lead_note_detail(request, lead_id, note_id):
    """
    PATCH /v1/leads/{lead_id}/notes/{note_id}   Body: { "body": "..." }
    DELETE /v1/leads/{lead_id}/notes/{note_id}
    """
    require_permission(request_principal(request), perms.LEADS_EDIT)
    lead = _get_lead(request, lead_id)

    note = LeadNote.objects.filter(id=note_id, lead=lead, deleted_at__isnull=True).first()
    if not note:
        raise NotFound("Note not found")

    if request.method == "DELETE":
        with transaction.atomic():
            note.soft_delete()
            record_lead_event(
                lead=lead,
                event_type="lead.note.deleted",
                source="dashboard",
                actor_user_id=request.user.id,
                data={"note_id": str(note.id)},
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = LeadNoteWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)

    with transaction.atomic():
        note.body = s.validated_data["body"]
        note.updated_by_user_id = request.user.id
        note.updated_at = timezone.now()
        note.save(update_fields=["body", "updated_by_user_id", "updated_at"])
        record_lead_event(
            lead=lead,
            event_type="lead.note.updated",
            source="dashboard",
            actor_user_id=request.user.id,
            data={"note_id": str(note.id)},
        )

    return Response({"note": LeadNoteSerializer(note).data})
