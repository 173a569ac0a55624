import pytest

from crm.accounts.models import Account
from crm.campaigns.models import Campaign
from crm.contacts.models import Contact
from crm.leads.models import Lead
from crm.subdealers.models import Subdealer


@pytest.fixture
def crm_data(rep, manager):
    campaign = Campaign.objects.create(name="Expo", channel="event", status="active")
    Lead.objects.create(name="A", email="a@x.com", owner=rep, status="new", source="website")
    Lead.objects.create(name="B", email="b@x.com", owner=rep, status="qualified", campaign=campaign, source="campaign")
    Lead.objects.create(name="C", email="c@x.com", owner=manager, status="converted", source="referral")
    Contact.objects.create(first_name="Rep", email="rc@x.com", owner=rep)
    Contact.objects.create(first_name="Mgr", email="mc@x.com", owner=manager)
    Account.objects.create(name="Acme")
    Subdealer.objects.create(phone="9876543210", gst_number="27AABCU9603R1ZM", legal_name="AABCU Enterprises Private Limited")


@pytest.mark.django_db
def test_admin_dashboard_org_totals(admin_client, crm_data):
    r = admin_client.get("/v1/dashboard")
    assert r.status_code == 200
    body = r.json()
    assert body["role"] == "system_admin"
    data = body["data"]
    assert data["leads_total"] == 3
    assert data["leads_by_status"] == {"new": 1, "qualified": 1, "converted": 1}
    assert data["contacts_total"] == 2
    assert data["accounts_total"] == 1
    assert data["campaigns_by_status"] == {"active": 1}
    assert data["subdealers_total"] == 1


@pytest.mark.django_db
def test_manager_dashboard_includes_leads_per_owner(manager_client, crm_data, rep):
    data = manager_client.get("/v1/dashboard").json()["data"]
    per_owner = {row["owner_id"]: row["leads"] for row in data["leads_per_owner"]}
    assert per_owner[rep.id] == 2


@pytest.mark.django_db
def test_rep_dashboard_is_own_work(rep_client, crm_data):
    data = rep_client.get("/v1/dashboard").json()["data"]
    assert data == {"leads_total": 2, "leads_by_status": {"new": 1, "qualified": 1}, "contacts_total": 1}


@pytest.mark.django_db
def test_marketing_dashboard(marketer_client, crm_data):
    data = marketer_client.get("/v1/dashboard").json()["data"]
    assert data["campaigns_by_channel"] == {"event": 1}
    assert data["leads_by_source"] == {"website": 1, "campaign": 1, "referral": 1}
    assert data["leads_from_campaigns"] == 1
    assert data["conversion_rate"] == round(1 / 3, 4)


@pytest.mark.django_db
def test_dashboard_needs_permission(make_user, client_for):
    user = make_user("limited", "sales_rep", permissions=["leads.view"])
    assert client_for(user).get("/v1/dashboard").status_code == 403
