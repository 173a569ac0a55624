import logging
import time

import jwt
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from crm.common.errors import Unauthorized
from crm.iam.principal import Principal

logger = logging.getLogger(__name__)


def issue_token(principal: Principal) -> str:
    """
    Signed, time-bounded assertion of the principal (lifetime: SIMPLE_JWT.ACCESS_TOKEN_LIFETIME).
    There is no server-side session and no revocation list.
    """
    token = AccessToken()
    token[api_settings.USER_ID_CLAIM] = principal.user_id
    token["email"] = principal.email
    token["role"] = principal.role
    token["permissions"] = sorted(principal.permissions)
    return str(token)


def verify_token(raw: str) -> Principal:
    """
    Check signature first, then expiry, so a forged token is never reported as merely expired.
    """
    try:
        payload = jwt.decode(
            raw,
            api_settings.SIGNING_KEY,
            algorithms=[api_settings.ALGORITHM],
            options={"verify_exp": False, "verify_aud": False},
        )
    except jwt.InvalidTokenError:
        raise Unauthorized("Token is invalid", code="TOKEN_INVALID")

    if payload.get(api_settings.TOKEN_TYPE_CLAIM) != "access":
        raise Unauthorized("Token is invalid", code="TOKEN_INVALID")

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp <= time.time():
        raise Unauthorized("Token has expired", code="TOKEN_EXPIRED")

    user_id = payload.get(api_settings.USER_ID_CLAIM)
    role = payload.get("role")
    if user_id is None or not role:
        raise Unauthorized("Token is invalid", code="TOKEN_INVALID")

    return Principal(
        user_id=int(user_id),
        email=payload.get("email") or "",
        role=role,
        permissions=frozenset(payload.get("permissions") or []),
    )
