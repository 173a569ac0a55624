import pytest

from crm.accounts.models import Account
from crm.contacts.models import Contact


@pytest.mark.django_db
def test_contact_requires_email_or_phone(rep_client):
    r = rep_client.post("/v1/contacts/", {"first_name": "Asha"}, format="json")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.django_db
def test_contact_crud_and_account_filter(rep_client, rep):
    account = Account.objects.create(name="Acme")
    other = Account.objects.create(name="Other")
    Contact.objects.create(first_name="Other", phone="9000000000", account=other)

    r = rep_client.post(
        "/v1/contacts/",
        {"first_name": "Asha", "last_name": "Rao", "email": "ASHA@acme.com", "account": str(account.id)},
        format="json",
    )
    assert r.status_code == 201
    contact = r.json()
    assert contact["full_name"] == "Asha Rao"
    assert contact["email"] == "asha@acme.com"
    assert contact["owner_id"] == rep.id

    r = rep_client.get(f"/v1/contacts/?account_id={account.id}")
    assert [c["id"] for c in r.json()["items"]] == [contact["id"]]

    assert rep_client.get("/v1/contacts/?account_id=not-a-uuid").json()["page"]["total"] == 0

    r = rep_client.patch(f"/v1/contacts/{contact['id']}/", {"title": "Buyer"}, format="json")
    assert r.status_code == 200
    assert r.json()["title"] == "Buyer"


@pytest.mark.django_db
def test_contact_cannot_attach_deleted_account(rep_client):
    account = Account.objects.create(name="Gone")
    account.soft_delete()

    r = rep_client.post(
        "/v1/contacts/",
        {"first_name": "Asha", "phone": "9876543210", "account": str(account.id)},
        format="json",
    )
    assert r.status_code == 400


@pytest.mark.django_db
def test_rep_cannot_delete_contacts(rep_client):
    contact = Contact.objects.create(first_name="Keep", phone="9876543210")
    assert rep_client.delete(f"/v1/contacts/{contact.id}/").status_code == 403
