import hashlib
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import asdict, dataclass, field

from django.conf import settings

from crm.common.errors import UpstreamUnavailable
from crm.subdealers.validators import pan_from_gst, state_from_gst

logger = logging.getLogger(__name__)


class GstLookupError(Exception):
    pass


@dataclass
class GstAddress:
    building: str = ""
    street: str = ""
    locality: str = ""
    district: str = ""
    state: str = ""
    pincode: str = ""


@dataclass
class GstDetails:
    gst_number: str
    legal_name: str
    trade_name: str = ""
    address: GstAddress = field(default_factory=GstAddress)
    registration_date: str = ""
    business_type: str = ""
    status: str = ""
    jurisdiction: str = ""
    pan: str = ""

    def as_dict(self) -> dict:
        """Wire shape (camelCase) used by the registration endpoints."""
        return {
            "gstNumber": self.gst_number,
            "legalName": self.legal_name,
            "tradeName": self.trade_name,
            "address": asdict(self.address),
            "registrationDate": self.registration_date,
            "businessType": self.business_type,
            "status": self.status,
            "jurisdiction": self.jurisdiction,
            "pan": self.pan,
        }


def _s(value) -> str:
    return str(value or "").strip()


def details_from_provider(gst: str, data: dict) -> GstDetails:
    """
    Map a GSTN taxpayer record (lgnm, tradeNam, pradr.addr.*, ...) to GstDetails.
    """
    addr = ((data.get("pradr") or {}).get("addr")) or {}
    street = ", ".join(p for p in (_s(addr.get("flno")), _s(addr.get("st"))) if p)
    return GstDetails(
        gst_number=gst,
        legal_name=_s(data.get("lgnm")),
        trade_name=_s(data.get("tradeNam")),
        address=GstAddress(
            building=", ".join(p for p in (_s(addr.get("bno")), _s(addr.get("bnm"))) if p),
            street=street,
            locality=_s(addr.get("loc")),
            district=_s(addr.get("dst")),
            state=_s(addr.get("stcd")) or state_from_gst(gst),
            pincode=_s(addr.get("pncd")),
        ),
        registration_date=_s(data.get("rgdt")),
        business_type=_s(data.get("ctb")),
        status=_s(data.get("sts")),
        jurisdiction=_s(data.get("stj")),
        pan=pan_from_gst(gst),
    )


def mock_gst_details(gst: str) -> GstDetails:
    """
    Deterministic stand-in record derived only from the GST number.
    """
    pan = pan_from_gst(gst)
    state = state_from_gst(gst)
    n = int(hashlib.sha256(gst.encode("utf-8")).hexdigest()[:8], 16)
    return GstDetails(
        gst_number=gst,
        legal_name=f"{pan[:5]} Enterprises Private Limited",
        trade_name=f"{pan[:5]} Enterprises",
        address=GstAddress(
            building=f"Plot No. {n % 500 + 1}",
            street="Industrial Estate Road",
            locality=f"Sector {n % 40 + 1}",
            district=state or "Unknown",
            state=state,
            pincode=f"{400000 + n % 100000:06d}",
        ),
        registration_date="01/07/2017",
        business_type="Private Limited Company",
        status="Active",
        jurisdiction=f"{state or 'Central'} - Ward {n % 90 + 10}",
        pan=pan,
    )


class GstLookupClient:
    """
    GST registry lookup.

    Without an api_key every lookup returns mock data. With one, provider
    failures raise UpstreamUnavailable in production and fall back to mock
    data otherwise.
    """

    def __init__(self, *, api_key: str, base_url: str, timeout: int = 10, production: bool = False):
        self.api_key = api_key or ""
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.production = production

    def fetch(self, gst: str) -> GstDetails:
        if not self.api_key:
            return mock_gst_details(gst)

        try:
            return self._fetch_remote(gst)
        except GstLookupError as e:
            if self.production:
                logger.error("gst.lookup_failed gst_suffix=%s error=%s", gst[-4:], e)
                raise UpstreamUnavailable("GST lookup service is unavailable") from e
            logger.warning("gst.lookup_failed_using_mock gst_suffix=%s error=%s", gst[-4:], e)
            return mock_gst_details(gst)

    def _fetch_remote(self, gst: str) -> GstDetails:
        url = f"{self.base_url}/{urllib.parse.quote(self.api_key)}/{urllib.parse.quote(gst)}"
        req = urllib.request.Request(url, headers={"Accept": "application/json"}, method="GET")

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                status = int(getattr(resp, "status", 200))
                raw = resp.read()
        except urllib.error.HTTPError as e:
            raise GstLookupError(f"HTTP {e.code}") from e
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise GstLookupError(f"unreachable: {e}") from e

        if not 200 <= status < 300:
            raise GstLookupError(f"HTTP {status}")

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise GstLookupError("malformed response") from e

        if not isinstance(payload, dict) or not payload.get("flag") or not isinstance(payload.get("data"), dict):
            raise GstLookupError(str(payload.get("message") if isinstance(payload, dict) else "unexpected payload"))

        details = details_from_provider(gst, payload["data"])
        if not details.legal_name:
            raise GstLookupError("response missing legal name")
        return details


def fetch_gst_details(gst: str) -> GstDetails:
    client = GstLookupClient(
        api_key=settings.GST_API_KEY,
        base_url=settings.GST_API_BASE_URL,
        timeout=settings.GST_API_TIMEOUT,
        production=settings.IS_PRODUCTION,
    )
    return client.fetch(gst)
