import pytest

from crm.audit.models import AuditLog
from crm.iam import constants as perms
from crm.iam.models import UserRole


@pytest.mark.django_db
def test_admin_creates_user_with_default_permissions(admin_client):
    r = admin_client.post(
        "/v1/users",
        {"email": "New@Acme.com", "password": "longpassword", "role": perms.ROLE_MARKETING},
        format="json",
    )
    assert r.status_code == 201
    user = r.json()["user"]
    assert user["email"] == "new@acme.com"
    assert user["permissions"] == perms.ROLE_DEFAULT_PERMISSIONS[perms.ROLE_MARKETING]
    assert AuditLog.objects.filter(action="user.created", entity_id=str(user["id"])).exists()


@pytest.mark.django_db
def test_unknown_permission_rejected(admin_client):
    r = admin_client.post(
        "/v1/users",
        {"email": "x@acme.com", "password": "longpassword", "role": perms.ROLE_SALES_REP, "permissions": ["leads.fly"]},
        format="json",
    )
    assert r.status_code == 400


@pytest.mark.django_db
def test_update_role_resets_permissions(admin_client, rep):
    r = admin_client.patch(f"/v1/users/{rep.id}", {"role": perms.ROLE_SALES_MANAGER}, format="json")
    assert r.status_code == 200
    role = UserRole.objects.get(user=rep)
    assert role.role == perms.ROLE_SALES_MANAGER
    assert role.permissions == perms.ROLE_DEFAULT_PERMISSIONS[perms.ROLE_SALES_MANAGER]


@pytest.mark.django_db
def test_update_permissions_keeps_role(admin_client, rep):
    r = admin_client.patch(f"/v1/users/{rep.id}", {"permissions": [perms.LEADS_VIEW]}, format="json")
    assert r.status_code == 200
    assert r.json()["user"]["role"] == perms.ROLE_SALES_REP
    assert r.json()["user"]["permissions"] == [perms.LEADS_VIEW]


@pytest.mark.django_db
def test_users_endpoint_needs_users_manage(manager_client):
    assert manager_client.get("/v1/users").status_code == 403


@pytest.mark.django_db
def test_list_users_filtered_by_role(admin_client, rep, manager):
    r = admin_client.get(f"/v1/users?role={perms.ROLE_SALES_REP}")
    assert r.status_code == 200
    assert [u["id"] for u in r.json()["items"]] == [rep.id]
