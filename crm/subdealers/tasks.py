import logging

from celery import shared_task

from crm.common.sms import SmsDeliveryError, send_sms
from crm.subdealers.constants import OTP_TTL_SECONDS

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=0)
def deliver_otp_sms(self, phone: str, code: str, production: bool = False):
    """
    Send the OTP by SMS.

    Outside production a delivery failure is not an error: the code is written
    to the log so registration can be completed locally.
    """
    body = f"{code} is your verification code. It is valid for {OTP_TTL_SECONDS // 60} minutes."
    try:
        send_sms(phone=phone, body=body)
    except SmsDeliveryError as e:
        if production:
            logger.error("otp.sms_failed phone_suffix=%s error=%s", phone[-4:], e)
            raise
        logger.warning("[DEV OTP] phone=%s code=%s (sms unavailable: %s)", phone, code, e)
