from django.contrib.auth import get_user_model
from rest_framework_simplejwt.authentication import JWTAuthentication

from crm.common.errors import Unauthorized
from crm.iam.tokens import verify_token


class PrincipalAuthentication(JWTAuthentication):
    """
    Bearer token -> (user, Principal). request.auth carries the Principal.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None

        raw = self.get_raw_token(header)
        if raw is None:
            return None

        principal = verify_token(raw.decode("utf-8") if isinstance(raw, bytes) else raw)

        user = get_user_model().objects.filter(id=principal.user_id, is_active=True).first()
        if not user:
            raise Unauthorized("User not found or inactive", code="TOKEN_INVALID")

        return user, principal
