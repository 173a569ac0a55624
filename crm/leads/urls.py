from django.urls import path
from crm.leads.api import (
    leads_list,
    leads_detail,
    lead_qualify,
    lead_convert,
    lead_timeline,
    lead_notes,
    lead_note_detail,
)

urlpatterns = [
    path("leads", leads_list, name="leads-list"),
    path("leads/<uuid:lead_id>", leads_detail, name="leads-detail"),
    path("leads/<uuid:lead_id>/qualify", lead_qualify, name="leads-qualify"),
    path("leads/<uuid:lead_id>/convert", lead_convert, name="leads-convert"),
    path("leads/<uuid:lead_id>/timeline", lead_timeline, name="leads-timeline"),
    path("leads/<uuid:lead_id>/notes", lead_notes, name="lead-notes"),
    path("leads/<uuid:lead_id>/notes/<uuid:note_id>", lead_note_detail, name="lead-note-detail"),
]
