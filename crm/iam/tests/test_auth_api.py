import pytest
from rest_framework.test import APIClient

from crm.iam import constants as perms


@pytest.mark.django_db
def test_login_returns_token_and_user(make_user):
    make_user("rep1", perms.ROLE_SALES_REP)
    api = APIClient()

    r = api.post("/v1/auth/login", {"email": "REP1@acme.com", "password": "pass12345"}, format="json")
    assert r.status_code == 200
    body = r.json()
    assert body["user"]["role"] == perms.ROLE_SALES_REP
    assert perms.LEADS_VIEW in body["user"]["permissions"]

    api.credentials(HTTP_AUTHORIZATION=f"Bearer {body['token']}")
    me = api.get("/v1/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "rep1@acme.com"
    assert me.json()["user"]["role"] == perms.ROLE_SALES_REP


@pytest.mark.django_db
def test_login_bad_password(make_user):
    make_user("rep2", perms.ROLE_SALES_REP)
    r = APIClient().post("/v1/auth/login", {"email": "rep2@acme.com", "password": "wrong"}, format="json")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.django_db
def test_login_without_role_is_forbidden(make_user):
    make_user("norole")
    r = APIClient().post("/v1/auth/login", {"email": "norole@acme.com", "password": "pass12345"}, format="json")
    assert r.status_code == 403


@pytest.mark.django_db
def test_bad_bearer_token():
    api = APIClient()
    api.credentials(HTTP_AUTHORIZATION="Bearer abc.def.ghi")
    r = api.get("/v1/auth/me")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "TOKEN_INVALID"


@pytest.mark.django_db
def test_token_for_deactivated_user_is_rejected(rep, rep_client):
    rep.is_active = False
    rep.save(update_fields=["is_active"])
    assert rep_client.get("/v1/auth/me").status_code == 401
