import json
import logging
import urllib.error
import urllib.request

from django.conf import settings

logger = logging.getLogger(__name__)


class SmsDeliveryError(Exception):
    pass


def send_sms(*, phone: str, body: str) -> None:
    """
    POST a single message to the configured SMS gateway.
    Raises SmsDeliveryError when the gateway is not configured or rejects the message.
    """
    api_url = getattr(settings, "SMS_API_URL", "")
    api_key = getattr(settings, "SMS_API_KEY", "")
    if not api_url or not api_key:
        raise SmsDeliveryError("SMS provider is not configured")

    payload = {
        "to": f"+91{phone}",
        "sender": getattr(settings, "SMS_SENDER_ID", "CRMOTP"),
        "message": body,
    }
    req = urllib.request.Request(
        api_url,
        data=json.dumps(payload).encode("utf-8"),
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        },
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=getattr(settings, "SMS_API_TIMEOUT", 10)) as resp:
            status = int(getattr(resp, "status", 200))
    except urllib.error.HTTPError as e:
        raise SmsDeliveryError(f"SMS gateway returned HTTP {e.code}") from e
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        raise SmsDeliveryError(f"SMS gateway unreachable: {e}") from e

    if not 200 <= status < 300:
        raise SmsDeliveryError(f"SMS gateway returned HTTP {status}")

    logger.info("sms.sent phone_suffix=%s", phone[-4:])
