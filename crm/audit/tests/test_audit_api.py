import pytest

from crm.audit.utils import audit


@pytest.mark.django_db
def test_audit_logs_filtered(admin_client):
    audit("lead.created", "lead", "L1", actor_user_id=1)
    audit("lead.updated", "lead", "L1", actor_user_id=1, data={"fields": ["name"]})
    audit("account.created", "account", "A1")

    r = admin_client.get("/v1/audit/logs?entity_type=lead&entity_id=L1")
    assert r.status_code == 200
    items = r.json()["items"]
    assert [i["action"] for i in items] == ["lead.updated", "lead.created"]
    assert items[0]["data"] == {"fields": ["name"]}


@pytest.mark.django_db
def test_audit_logs_need_permission(rep_client):
    assert rep_client.get("/v1/audit/logs").status_code == 403
