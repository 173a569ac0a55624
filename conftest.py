import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from crm.iam import constants as perms
from crm.iam.models import assign_role
from crm.iam.principal import principal_for_user
from crm.iam.tokens import issue_token

User = get_user_model()


@pytest.fixture
def make_user(db):
    def _make(username, role=None, *, permissions=None, password="pass12345"):
        user = User.objects.create_user(username=username, email=f"{username}@acme.com", password=password)
        if role:
            assign_role(user, role, permissions=permissions)
        return User.objects.select_related("crm_role").get(id=user.id)
    return _make


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        token = issue_token(principal_for_user(user))
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client
    return _client


@pytest.fixture
def admin_user(make_user):
    return make_user("sysadmin", perms.ROLE_SYSTEM_ADMIN, permissions=[])


@pytest.fixture
def manager(make_user):
    return make_user("manager", perms.ROLE_SALES_MANAGER)


@pytest.fixture
def rep(make_user):
    return make_user("rep", perms.ROLE_SALES_REP)


@pytest.fixture
def marketer(make_user):
    return make_user("marketer", perms.ROLE_MARKETING)


@pytest.fixture
def admin_client(admin_user, client_for):
    return client_for(admin_user)


@pytest.fixture
def manager_client(manager, client_for):
    return client_for(manager)


@pytest.fixture
def rep_client(rep, client_for):
    return client_for(rep)


@pytest.fixture
def marketer_client(marketer, client_for):
    return client_for(marketer)
