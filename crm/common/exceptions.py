import logging

from rest_framework import exceptions, status
from rest_framework.views import exception_handler

from crm.common.errors import CrmError, RateLimited

logger = logging.getLogger(__name__)

_DRF_CODES = {
    exceptions.ValidationError: "VALIDATION_ERROR",
    exceptions.ParseError: "VALIDATION_ERROR",
    exceptions.NotAuthenticated: "UNAUTHORIZED",
    exceptions.AuthenticationFailed: "UNAUTHORIZED",
    exceptions.PermissionDenied: "FORBIDDEN",
    exceptions.NotFound: "NOT_FOUND",
    exceptions.MethodNotAllowed: "METHOD_NOT_ALLOWED",
    exceptions.Throttled: "RATE_LIMITED",
}


def _drf_code(exc) -> str:
    for klass, code in _DRF_CODES.items():
        if isinstance(exc, klass):
            return code
    return "ERROR"


def crm_exception_handler(exc, context):
    """
    Render every API error as
      {"success": false, "error": {"code", "message", "details"}}
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, CrmError):
        payload = {"code": exc.code, "message": str(exc.detail), "details": exc.details}
        if isinstance(exc, RateLimited):
            response["Retry-After"] = str(exc.retry_after_seconds)
    elif isinstance(exc, exceptions.ValidationError):
        payload = {"code": "VALIDATION_ERROR", "message": "Invalid request", "details": response.data}
    else:
        message = response.data.get("detail", "") if isinstance(response.data, dict) else ""
        payload = {"code": _drf_code(exc), "message": str(message), "details": {}}

    if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("api.error code=%s message=%s", payload["code"], payload["message"])

    response.data = {"success": False, "error": payload}
    return response
