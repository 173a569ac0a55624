from datetime import datetime, timezone as tz

from django.conf import settings
from opensearchpy import OpenSearch


def get_client() -> OpenSearch:
    return OpenSearch(
        hosts=[settings.OPENSEARCH_URL],
        timeout=5,
        max_retries=1,
    )


def leads_index_name() -> str:
    return f"{settings.OPENSEARCH_INDEX_PREFIX}-leads".lower()


def upsert_lead_doc(*, lead) -> None:
    client = get_client()
    now = datetime.now(tz=tz.utc).isoformat()

    doc = {
        "lead_id": str(lead.id),
        "name": lead.name or "",
        "email": lead.email or "",
        "phone": lead.phone or "",
        "company": lead.company or "",
        "source": lead.source,
        "status": lead.status,
        "owner_id": lead.owner_id,
        "campaign_id": str(lead.campaign_id) if lead.campaign_id else "",
        "deleted": lead.deleted_at is not None,
        "created_at": lead.created_at.isoformat() if lead.created_at else now,
        "updated_at": lead.updated_at.isoformat() if lead.updated_at else now,
    }

    # lead_id as _id so updates overwrite
    client.index(index=leads_index_name(), id=str(lead.id), body=doc, refresh=True)
