from rest_framework import status
from rest_framework.exceptions import APIException


class CrmError(APIException):
    """
    Base for every error the API surfaces deliberately.
    `code` is machine-checkable; `details` is rendered verbatim.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "ERROR"
    default_detail = "Request failed"

    def __init__(self, message=None, *, code=None, details=None):
        super().__init__(detail=message or self.default_detail)
        self.code = code or self.default_code
        self.details = details or {}


class InvalidFormat(CrmError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "INVALID_FORMAT"
    default_detail = "Invalid format"


class RateLimited(CrmError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_code = "RATE_LIMITED"
    default_detail = "Too many requests"

    def __init__(self, retry_after_seconds: int, message=None):
        self.retry_after_seconds = int(retry_after_seconds)
        super().__init__(message, details={"retry_after": self.retry_after_seconds})


class UpstreamUnavailable(CrmError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_code = "UPSTREAM_UNAVAILABLE"
    default_detail = "Upstream service unavailable"


class OtpNotFound(CrmError):
    default_code = "OTP_NOT_FOUND"
    default_detail = "No active OTP for this phone; request a new one"


class OtpInvalid(CrmError):
    default_code = "OTP_INVALID"
    default_detail = "Invalid OTP"


class OtpExpired(CrmError):
    status_code = status.HTTP_410_GONE
    default_code = "OTP_EXPIRED"
    default_detail = "OTP has expired; request a new one"


class OtpAttemptsExhausted(CrmError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_code = "OTP_ATTEMPTS_EXHAUSTED"
    default_detail = "Too many invalid attempts; request a new OTP"


class DuplicateRegistration(CrmError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "DUPLICATE_REGISTRATION"
    default_detail = "Phone or GST number is already registered"


class Conflict(CrmError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "CONFLICT"
    default_detail = "Conflict"


class Unauthorized(CrmError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "UNAUTHORIZED"
    default_detail = "Authentication required"


class Forbidden(CrmError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"
    default_detail = "You do not have permission to perform this action"


class NotFound(CrmError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"
    default_detail = "Not found"
