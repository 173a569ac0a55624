import pytest
from django.db import IntegrityError
from rest_framework.test import APIClient

from crm.audit.models import AuditLog
from crm.subdealers import otp as otp_module
from crm.subdealers.gst import mock_gst_details
from crm.subdealers.models import OtpChallenge, Subdealer

PHONE = "9876543210"
GST = "27AABCU9603R1ZM"


@pytest.fixture
def api():
    return APIClient()


@pytest.fixture
def fixed_code(monkeypatch):
    monkeypatch.setattr(otp_module, "generate_code", lambda length=6: "482913")
    return "482913"


def _register(api, phone=PHONE, otp="482913", gst_details=None):
    return api.post(
        "/v1/subdealer/verify-otp",
        {"phone": phone, "otp": otp, "gstDetails": gst_details or mock_gst_details(GST).as_dict()},
        format="json",
    )


@pytest.mark.django_db
def test_end_to_end_registration(api, fixed_code):
    r1 = api.post("/v1/subdealer/fetch-gst", {"gstNumber": GST.lower()}, format="json")
    assert r1.status_code == 200
    body = r1.json()
    assert body["success"] is True
    assert body["data"]["gstNumber"] == GST
    assert body["data"]["legalName"] == "AABCU Enterprises Private Limited"

    r2 = api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")
    assert r2.status_code == 200
    assert r2.json()["success"] is True
    assert r2.json()["message"]

    r3 = _register(api, gst_details=body["data"])
    assert r3.status_code == 201
    j = r3.json()
    assert j["success"] is True
    assert j["data"]["phone"] == PHONE
    assert j["data"]["gstNumber"] == GST
    assert j["data"]["legalName"] == "AABCU Enterprises Private Limited"

    subdealer = Subdealer.objects.get(id=j["data"]["id"])
    assert subdealer.phone_verified is True
    assert subdealer.verified_at is not None
    assert subdealer.pan == "AABCU9603R"
    assert OtpChallenge.objects.get(phone=PHONE).subdealer_id == subdealer.id
    assert AuditLog.objects.filter(action="subdealer.registered", entity_id=str(subdealer.id)).exists()


@pytest.mark.django_db
def test_fetch_gst_rejects_bad_format(api):
    r = api.post("/v1/subdealer/fetch-gst", {"gstNumber": "27AABCU"}, format="json")
    assert r.status_code == 400
    assert r.json() == {
        "success": False,
        "error": {"code": "INVALID_FORMAT", "message": "GST number must be 15 alphanumeric characters", "details": {"field": "gstNumber"}},
    }


@pytest.mark.django_db
def test_generate_otp_rejects_bad_phone(api):
    r = api.post("/v1/subdealer/generate-otp", {"phone": "5876543210"}, format="json")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_FORMAT"
    assert not OtpChallenge.objects.exists()


@pytest.mark.django_db
def test_sixth_generate_otp_is_rate_limited(api):
    for _ in range(5):
        r = api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")
        assert r.status_code == 200

    r = api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")
    assert r.status_code == 429
    assert r.json()["error"]["code"] == "RATE_LIMITED"
    assert int(r["Retry-After"]) > 0
    assert r.json()["error"]["details"]["retry_after"] == int(r["Retry-After"])
    assert OtpChallenge.objects.filter(phone=PHONE).count() == 5


@pytest.mark.django_db
def test_rate_limit_counts_malformed_requests(api):
    for _ in range(5):
        r = api.post("/v1/subdealer/generate-otp", {"phone": "12345"}, format="json")
        assert r.status_code == 400

    r = api.post("/v1/subdealer/generate-otp", {"phone": "12345"}, format="json")
    assert r.status_code == 429


@pytest.mark.django_db
def test_rate_limits_are_per_phone(api):
    for _ in range(5):
        api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")

    r = api.post("/v1/subdealer/generate-otp", {"phone": "9123456780"}, format="json")
    assert r.status_code == 200


@pytest.mark.django_db
def test_fetch_gst_rate_limited_after_twenty(api):
    for _ in range(20):
        assert api.post("/v1/subdealer/fetch-gst", {"gstNumber": GST}, format="json").status_code == 200

    r = api.post("/v1/subdealer/fetch-gst", {"gstNumber": GST}, format="json")
    assert r.status_code == 429


@pytest.mark.django_db
def test_verify_rate_limited_after_ten(api, fixed_code):
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")
    for _ in range(10):
        assert _register(api, otp="000000").status_code in (400, 429)

    r = _register(api, otp="000000")
    assert r.status_code == 429
    assert r.json()["error"]["code"] == "RATE_LIMITED"


@pytest.mark.django_db
def test_wrong_otp_reports_attempts_left(api, fixed_code):
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")

    r = _register(api, otp="000000")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "OTP_INVALID"
    assert r.json()["error"]["details"]["attempts_left"] == 4
    assert not Subdealer.objects.exists()


@pytest.mark.django_db
def test_exhausted_otp_returns_429(api, fixed_code):
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")
    for _ in range(5):
        _register(api, otp="000000")

    r = _register(api, otp=fixed_code)
    assert r.status_code == 429
    assert r.json()["error"]["code"] == "OTP_ATTEMPTS_EXHAUSTED"


@pytest.mark.django_db
def test_verify_without_challenge(api):
    r = _register(api)
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "OTP_NOT_FOUND"


@pytest.mark.django_db
def test_verify_requires_gst_details(api, fixed_code):
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")
    r = api.post("/v1/subdealer/verify-otp", {"phone": PHONE, "otp": fixed_code}, format="json")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_FORMAT"
    # the challenge is untouched
    assert OtpChallenge.objects.get(phone=PHONE).consumed_at is None


@pytest.mark.django_db
def test_duplicate_phone_rejected_after_otp_success(api, fixed_code):
    Subdealer.objects.create(phone=PHONE, gst_number="29AAACX1234A1Z5", legal_name="Existing", phone_verified=True)
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")

    r = _register(api)
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "DUPLICATE_REGISTRATION"
    assert Subdealer.objects.count() == 1
    # OTP verification committed on its own
    assert OtpChallenge.objects.get(phone=PHONE).consumed_at is not None


@pytest.mark.django_db
def test_duplicate_gst_rejected(api, fixed_code):
    Subdealer.objects.create(phone="9123456780", gst_number=GST, legal_name="Existing", phone_verified=True)
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")

    r = _register(api)
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "DUPLICATE_REGISTRATION"


@pytest.mark.django_db
def test_subdealer_listing_requires_permission(make_user, client_for, rep_client):
    Subdealer.objects.create(phone=PHONE, gst_number=GST, legal_name="AABCU Enterprises Private Limited", address_state="Maharashtra")

    assert rep_client.get("/v1/subdealers").status_code == 403

    viewer = make_user("viewer", "sales_manager")
    r = client_for(viewer).get("/v1/subdealers?q=aabcu&state=maharashtra")
    assert r.status_code == 200
    assert r.json()["page"]["total"] == 1

    sid = r.json()["items"][0]["id"]
    r2 = client_for(viewer).get(f"/v1/subdealers/{sid}")
    assert r2.status_code == 200
    assert r2.json()["subdealer"]["gst_number"] == GST


@pytest.mark.django_db
def test_subdealer_listing_requires_authentication(api):
    assert api.get("/v1/subdealers").status_code == 401


@pytest.mark.django_db
def test_concurrent_insert_maps_to_duplicate(api, fixed_code, monkeypatch):
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")

    def lost_race(*args, **kwargs):
        raise IntegrityError("UNIQUE constraint failed: subdealers_subdealer.phone")

    monkeypatch.setattr(Subdealer.objects, "create", lost_race)

    r = _register(api)
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "DUPLICATE_REGISTRATION"
    assert not Subdealer.objects.exists()
    assert not AuditLog.objects.filter(action="subdealer.registered").exists()
    challenge = OtpChallenge.objects.get(phone=PHONE)
    assert challenge.consumed_at is not None
    assert challenge.subdealer_id is None


@pytest.mark.django_db
def test_non_ascii_phone_cannot_register_twice(api, fixed_code):
    Subdealer.objects.create(phone=PHONE, gst_number="29AAACX1234A1Z5", legal_name="Existing", phone_verified=True)

    r = api.post("/v1/subdealer/generate-otp", {"phone": "98765432١٠"}, format="json")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_FORMAT"

    r2 = _register(api, phone="98765432١٠")
    assert r2.status_code == 400
    assert r2.json()["error"]["code"] == "INVALID_FORMAT"
    assert Subdealer.objects.count() == 1
    assert not OtpChallenge.objects.exists()


@pytest.mark.django_db
def test_non_ascii_otp_digits_do_not_consume_an_attempt(api, fixed_code):
    api.post("/v1/subdealer/generate-otp", {"phone": PHONE}, format="json")

    r = _register(api, otp="٤٨٢٩١٣")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_FORMAT"
    assert OtpChallenge.objects.get(phone=PHONE).attempt_count == 0
