import pytest

from crm.leads.models import Lead, LeadEvent, LeadNote


@pytest.mark.django_db
def test_lead_notes_crud_and_timeline_events(rep_client, rep):
    lead = Lead.objects.create(name="Patel", email="patel@x.com", owner=rep)

    r1 = rep_client.post(f"/v1/leads/{lead.id}/notes", {"body": "Asked about dealer margins."}, format="json")
    assert r1.status_code == 201
    note_id = r1.json()["note"]["id"]
    assert r1.json()["note"]["created_by_user_id"] == rep.id

    r2 = rep_client.get(f"/v1/leads/{lead.id}/notes")
    assert r2.status_code == 200
    assert len(r2.json()["items"]) == 1

    r3 = rep_client.patch(f"/v1/leads/{lead.id}/notes/{note_id}", {"body": "Wants a demo next week."}, format="json")
    assert r3.status_code == 200
    assert r3.json()["note"]["updated_by_user_id"] == rep.id

    r4 = rep_client.delete(f"/v1/leads/{lead.id}/notes/{note_id}")
    assert r4.status_code == 204
    assert LeadNote.objects.get(id=note_id).deleted_at is not None
    assert rep_client.get(f"/v1/leads/{lead.id}/notes").json()["page"]["total"] == 0

    types = list(LeadEvent.objects.filter(lead=lead).order_by("id").values_list("type", flat=True))
    assert types == ["lead.created", "lead.note.created", "lead.note.updated", "lead.note.deleted"]


@pytest.mark.django_db
def test_note_body_required(rep_client, rep):
    lead = Lead.objects.create(name="Patel", email="patel@x.com", owner=rep)
    assert rep_client.post(f"/v1/leads/{lead.id}/notes", {"body": ""}, format="json").status_code == 400


@pytest.mark.django_db
def test_note_on_other_lead_is_404(manager_client):
    a = Lead.objects.create(name="A", email="a@x.com")
    b = Lead.objects.create(name="B", email="b@x.com")
    note = LeadNote.objects.create(lead=a, body="x", created_by_user_id=1)

    r = manager_client.patch(f"/v1/leads/{b.id}/notes/{note.id}", {"body": "y"}, format="json")
    assert r.status_code == 404


@pytest.mark.django_db
def test_timeline_paginates_and_filters(manager_client):
    lead = Lead.objects.create(name="T", email="t@x.com")
    for i in range(3):
        LeadEvent.objects.create(lead=lead, type="lead.note.created", data_json={"i": i})

    r = manager_client.get(f"/v1/leads/{lead.id}/timeline?limit=2")
    assert r.status_code == 200
    assert r.json()["page"] == {"limit": 2, "offset": 0, "total": 4}
    assert len(r.json()["items"]) == 2

    r = manager_client.get(f"/v1/leads/{lead.id}/timeline?type=lead.created")
    assert [e["type"] for e in r.json()["items"]] == ["lead.created"]
