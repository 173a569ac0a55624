from __future__ import annotations

import logging

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from crm.leads.events import record_lead_event
from crm.leads.models import Lead
from crm.leads.opensearch import upsert_lead_doc

logger = logging.getLogger(__name__)


def _index_lead(lead_id) -> None:
    lead = Lead.objects.filter(id=lead_id).first()
    if not lead:
        return
    # best-effort; search falls back to the database
    try:
        upsert_lead_doc(lead=lead)
    except Exception:
        logger.warning("leads.index_failed lead_id=%s", lead_id, exc_info=True)


@receiver(post_save, sender=Lead)
def on_lead_saved(sender, instance: Lead, created: bool, **kwargs):
    if created and instance.deleted_at is None:
        record_lead_event(
            lead=instance,
            event_type="lead.created",
            source="system",
            actor_user_id=instance.owner_id,
            data={
                "name": instance.name or "",
                "email": instance.email or "",
                "phone": instance.phone or "",
                "source": instance.source,
                "campaign_id": str(instance.campaign_id) if instance.campaign_id else None,
            },
        )

    lead_id = instance.id
    transaction.on_commit(lambda: _index_lead(lead_id))
