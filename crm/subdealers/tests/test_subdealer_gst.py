import io
import json
import urllib.error

import pytest

from crm.common.errors import UpstreamUnavailable
from crm.subdealers import gst as gst_module
from crm.subdealers.gst import GstLookupClient, fetch_gst_details, mock_gst_details

GST = "27AABCU9603R1ZM"

PROVIDER_RECORD = {
    "flag": True,
    "message": "GSTIN found.",
    "data": {
        "gstin": GST,
        "lgnm": "UBER INDIA SYSTEMS PRIVATE LIMITED",
        "tradeNam": "UBER INDIA",
        "rgdt": "01/07/2017",
        "ctb": "Private Limited Company",
        "sts": "Active",
        "stj": "Mumbai - Ward 12",
        "pradr": {
            "addr": {
                "bno": "12",
                "bnm": "Trade Tower",
                "flno": "4th Floor",
                "st": "LBS Marg",
                "loc": "Kurla West",
                "dst": "Mumbai Suburban",
                "stcd": "Maharashtra",
                "pncd": "400070",
            }
        },
    },
}


class _Resp(io.BytesIO):
    status = 200

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


def _urlopen_returning(payload, status=200):
    def _urlopen(req, timeout=None):
        resp = _Resp(json.dumps(payload).encode("utf-8") if not isinstance(payload, bytes) else payload)
        resp.status = status
        return resp
    return _urlopen


def _urlopen_failing(req, timeout=None):
    raise urllib.error.URLError("connection refused")


def test_no_credential_returns_deterministic_mock(monkeypatch):
    monkeypatch.setattr(gst_module.urllib.request, "urlopen", _urlopen_failing)
    client = GstLookupClient(api_key="", base_url="https://gst.example", production=True)

    first = client.fetch(GST)
    second = client.fetch(GST)

    assert first == second
    assert first.legal_name == "AABCU Enterprises Private Limited"
    assert first.pan == "AABCU9603R"
    assert first.address.state == "Maharashtra"


def test_credentialed_lookup_maps_provider_fields(monkeypatch):
    seen = {}

    def _urlopen(req, timeout=None):
        seen["url"] = req.full_url
        seen["timeout"] = timeout
        return _urlopen_returning(PROVIDER_RECORD)(req, timeout)

    monkeypatch.setattr(gst_module.urllib.request, "urlopen", _urlopen)
    client = GstLookupClient(api_key="k123", base_url="https://gst.example/check/", timeout=7)

    details = client.fetch(GST)

    assert seen["url"] == f"https://gst.example/check/k123/{GST}"
    assert seen["timeout"] == 7
    assert details.legal_name == "UBER INDIA SYSTEMS PRIVATE LIMITED"
    assert details.trade_name == "UBER INDIA"
    assert details.address.building == "12, Trade Tower"
    assert details.address.street == "4th Floor, LBS Marg"
    assert details.address.pincode == "400070"
    assert details.registration_date == "01/07/2017"
    assert details.business_type == "Private Limited Company"
    assert details.status == "Active"
    assert details.jurisdiction == "Mumbai - Ward 12"
    assert details.pan == "AABCU9603R"


@pytest.mark.parametrize(
    "urlopen",
    [
        _urlopen_failing,
        _urlopen_returning({"flag": False, "message": "Invalid GSTIN"}),
        _urlopen_returning(b"<html>oops</html>"),
        _urlopen_returning(PROVIDER_RECORD, status=503),
    ],
)
def test_provider_failure_falls_back_to_mock_outside_production(monkeypatch, urlopen):
    monkeypatch.setattr(gst_module.urllib.request, "urlopen", urlopen)
    client = GstLookupClient(api_key="k123", base_url="https://gst.example", production=False)

    assert client.fetch(GST) == mock_gst_details(GST)


def test_provider_failure_raises_in_production(monkeypatch):
    monkeypatch.setattr(gst_module.urllib.request, "urlopen", _urlopen_failing)
    client = GstLookupClient(api_key="k123", base_url="https://gst.example", production=True)

    with pytest.raises(UpstreamUnavailable) as exc:
        client.fetch(GST)
    assert exc.value.status_code == 502


def test_fetch_gst_details_reads_settings(settings, monkeypatch):
    settings.GST_API_KEY = "k123"
    settings.IS_PRODUCTION = True
    monkeypatch.setattr(gst_module.urllib.request, "urlopen", _urlopen_failing)

    with pytest.raises(UpstreamUnavailable):
        fetch_gst_details(GST)


def test_as_dict_uses_wire_names():
    data = mock_gst_details(GST).as_dict()
    assert data["gstNumber"] == GST
    assert data["legalName"] == "AABCU Enterprises Private Limited"
    assert set(data["address"]) == {"building", "street", "locality", "district", "state", "pincode"}
