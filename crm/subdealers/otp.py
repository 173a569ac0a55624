import enum
import hashlib
import hmac
import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from crm.subdealers.constants import OTP_LENGTH, OTP_MAX_ATTEMPTS, OTP_TTL_SECONDS
from crm.subdealers.models import OtpChallenge
from crm.subdealers.tasks import deliver_otp_sms

logger = logging.getLogger(__name__)


class OtpResult(str, enum.Enum):
    VERIFIED = "verified"
    INVALID = "invalid"
    EXPIRED = "expired"
    EXHAUSTED = "exhausted"
    NOT_FOUND = "not_found"


def generate_code(length: int = OTP_LENGTH) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(length))


def hash_code(phone: str, code: str) -> str:
    return hmac.new(
        key=settings.OTP_HASH_SECRET.encode("utf-8"),
        msg=f"{phone}|{code}".encode("utf-8"),
        digestmod=hashlib.sha256,
    ).hexdigest()


def issue_challenge(phone: str) -> OtpChallenge:
    """
    Store a fresh challenge and hand the code to the SMS task.
    Only the latest challenge for a phone can be verified.
    """
    code = generate_code()
    challenge = OtpChallenge.objects.create(
        phone=phone,
        code_hash=hash_code(phone, code),
        expires_at=timezone.now() + timedelta(seconds=OTP_TTL_SECONDS),
    )
    logger.info("otp.issued challenge_id=%s phone_suffix=%s", challenge.id, phone[-4:])

    deliver_otp_sms.delay(phone, code, production=settings.IS_PRODUCTION)
    return challenge


def verify_challenge(phone: str, code: str):
    """
    Check `code` against the latest challenge for `phone`.
    Returns (OtpResult, challenge or None). Attempt counting commits even
    when the result is a failure.
    """
    now = timezone.now()

    with transaction.atomic():
        challenge = (
            OtpChallenge.objects.select_for_update()
            .filter(phone=phone)
            .order_by("-created_at", "-id")
            .first()
        )

        if challenge is None or challenge.consumed_at is not None:
            result = OtpResult.NOT_FOUND
        elif challenge.expires_at <= now:
            result = OtpResult.EXPIRED
        elif challenge.attempt_count >= OTP_MAX_ATTEMPTS:
            result = OtpResult.EXHAUSTED
        elif not hmac.compare_digest(hash_code(phone, code), challenge.code_hash):
            challenge.attempt_count += 1
            challenge.save(update_fields=["attempt_count"])
            result = OtpResult.INVALID
        else:
            challenge.consumed_at = now
            challenge.save(update_fields=["consumed_at"])
            result = OtpResult.VERIFIED

    logger.info(
        "otp.verify result=%s challenge_id=%s phone_suffix=%s",
        result.value,
        challenge.id if challenge else None,
        phone[-4:],
    )
    return result, challenge
