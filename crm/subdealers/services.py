import logging
import re

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from crm.audit.utils import audit
from crm.common.errors import (
    DuplicateRegistration,
    InvalidFormat,
    OtpAttemptsExhausted,
    OtpExpired,
    OtpInvalid,
    OtpNotFound,
)
from crm.common.ratelimit import rate_limit_or_raise
from crm.subdealers import constants as c
from crm.subdealers.gst import GstDetails, fetch_gst_details
from crm.subdealers.models import OtpChallenge, Subdealer
from crm.subdealers.otp import OtpResult, issue_challenge, verify_challenge
from crm.subdealers.validators import pan_from_gst, validate_gst, validate_phone

logger = logging.getLogger(__name__)

OTP_CODE_RE = re.compile(rf"^[0-9]{{{c.OTP_LENGTH}}}$", re.ASCII)


def _raw(value) -> str:
    return str(value or "").strip()


def fetch_gst(gst_number) -> GstDetails:
    rate_limit_or_raise(
        operation=c.OP_GST_FETCH,
        identifier=_raw(gst_number).upper(),
        limit=c.GST_FETCH_LIMIT,
        window_seconds=c.GST_FETCH_WINDOW_SECONDS,
    )
    gst = validate_gst(gst_number)
    return fetch_gst_details(gst)


def request_otp(phone) -> None:
    rate_limit_or_raise(
        operation=c.OP_OTP_ISSUE,
        identifier=_raw(phone),
        limit=c.OTP_ISSUE_LIMIT,
        window_seconds=c.OTP_ISSUE_WINDOW_SECONDS,
    )
    issue_challenge(validate_phone(phone))


def _raise_for(result: OtpResult, challenge: OtpChallenge | None) -> None:
    if result == OtpResult.NOT_FOUND:
        raise OtpNotFound()
    if result == OtpResult.EXPIRED:
        raise OtpExpired()
    if result == OtpResult.EXHAUSTED:
        raise OtpAttemptsExhausted()
    if result == OtpResult.INVALID:
        left = max(0, c.OTP_MAX_ATTEMPTS - challenge.attempt_count)
        raise OtpInvalid(details={"attempts_left": left})


def verify_and_register(*, phone, otp, gst_details: GstDetails | None) -> Subdealer:
    """
    Verify the OTP for `phone`, then create the subdealer from `gst_details`.

    OTP verification commits on its own; a failure while creating the record
    leaves the challenge consumed and the caller starts over with a new OTP.
    """
    rate_limit_or_raise(
        operation=c.OP_OTP_VERIFY,
        identifier=_raw(phone),
        limit=c.OTP_VERIFY_LIMIT,
        window_seconds=c.OTP_VERIFY_WINDOW_SECONDS,
    )

    phone = validate_phone(phone)
    code = _raw(otp)
    if not OTP_CODE_RE.match(code):
        raise InvalidFormat(f"OTP must be {c.OTP_LENGTH} digits", details={"field": "otp"})
    if gst_details is None:
        raise InvalidFormat("gstDetails is required", details={"field": "gstDetails"})
    gst = validate_gst(gst_details.gst_number)
    if not gst_details.legal_name:
        raise InvalidFormat("gstDetails.legalName is required", details={"field": "gstDetails.legalName"})

    result, challenge = verify_challenge(phone, code)
    if result != OtpResult.VERIFIED:
        _raise_for(result, challenge)

    now = timezone.now()
    addr = gst_details.address
    with transaction.atomic():
        if Subdealer.objects.filter(Q(phone=phone) | Q(gst_number=gst)).exists():
            logger.info("subdealer.duplicate phone_suffix=%s gst_suffix=%s", phone[-4:], gst[-4:])
            raise DuplicateRegistration()

        # the unique constraints decide concurrent registrations
        try:
            with transaction.atomic():
                subdealer = Subdealer.objects.create(
                    phone=phone,
                    gst_number=gst,
                    legal_name=gst_details.legal_name,
                    trade_name=gst_details.trade_name,
                    address_building=addr.building,
                    address_street=addr.street,
                    address_locality=addr.locality,
                    address_district=addr.district,
                    address_state=addr.state,
                    address_pincode=addr.pincode,
                    pan=pan_from_gst(gst),
                    business_type=gst_details.business_type,
                    status=gst_details.status,
                    jurisdiction=gst_details.jurisdiction,
                    registration_date=gst_details.registration_date,
                    phone_verified=True,
                    verified_at=now,
                )
        except IntegrityError as e:
            logger.info("subdealer.duplicate_on_insert phone_suffix=%s gst_suffix=%s", phone[-4:], gst[-4:])
            raise DuplicateRegistration() from e

        OtpChallenge.objects.filter(pk=challenge.pk).update(subdealer=subdealer)
        audit("subdealer.registered", "subdealer", subdealer.id, data={"gst_number": gst})

    logger.info("subdealer.registered subdealer_id=%s", subdealer.id)
    return subdealer
