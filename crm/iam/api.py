import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from crm.audit.utils import audit
from crm.common.errors import Forbidden, NotFound, Unauthorized
from crm.common.pagination import page_params, paginated
from crm.iam.constants import USERS_MANAGE
from crm.iam.models import assign_role
from crm.iam.permissions import HasPermission, request_principal
from crm.iam.principal import principal_for_user
from crm.iam.serializers import (
    LoginSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserUpdateSerializer,
)
from crm.iam.tokens import issue_token

logger = logging.getLogger(__name__)
User = get_user_model()


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """
    POST /v1/auth/login
    Body: { "email": "...", "password": "..." }
    Response 200: { "token": "<jwt>", "user": {...} }
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data["email"].strip().lower()

    user = User.objects.filter(email__iexact=email).select_related("crm_role").first()
    if not user or not user.is_active or not user.check_password(s.validated_data["password"]):
        logger.info("auth.login_failed email=%s", email)
        raise Unauthorized("Invalid email or password", code="INVALID_CREDENTIALS")

    principal = principal_for_user(user)
    if principal is None:
        logger.warning("auth.login_no_role user_id=%s", user.id)
        raise Forbidden("User has no CRM role assigned")

    return Response({"token": issue_token(principal), "user": UserSerializer(user).data})


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def me(request):
    """
    GET /v1/auth/me
    Principal as asserted by the bearer token.
    """
    principal = request_principal(request)
    return Response({"user": principal.as_dict()})


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, HasPermission.with_perms(USERS_MANAGE)])
def users_list(request):
    if request.method == "GET":
        limit, offset = page_params(request)
        qs = User.objects.select_related("crm_role").order_by("id")
        q = (request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(email__icontains=q)
        role = (request.query_params.get("role") or "").strip()
        if role:
            qs = qs.filter(crm_role__role=role)
        return Response(paginated(qs, UserSerializer, limit=limit, offset=offset))

    s = UserCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    with transaction.atomic():
        user = User.objects.create_user(
            username=data["email"],
            email=data["email"],
            password=data["password"],
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
        )
        assign_role(user, data["role"], data.get("permissions"))
        audit("user.created", "user", user.id, actor_user_id=request.user.id, data={"role": data["role"]})

    user = User.objects.select_related("crm_role").get(id=user.id)
    return Response({"user": UserSerializer(user).data}, status=status.HTTP_201_CREATED)


@api_view(["GET", "PATCH"])
@permission_classes([IsAuthenticated, HasPermission.with_perms(USERS_MANAGE)])
def users_detail(request, user_id: int):
    user = User.objects.select_related("crm_role").filter(id=user_id).first()
    if not user:
        raise NotFound("User not found")

    if request.method == "GET":
        return Response({"user": UserSerializer(user).data})

    s = UserUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    with transaction.atomic():
        fields = [f for f in ("first_name", "last_name", "is_active") if f in data]
        for f in fields:
            setattr(user, f, data[f])
        if fields:
            user.save(update_fields=fields)

        if "role" in data or "permissions" in data:
            current = getattr(user, "crm_role", None)
            role = data.get("role") or (current.role if current else None)
            if not role:
                raise Forbidden("A role is required before permissions can be set")
            permissions = data.get("permissions")
            if permissions is None and current and "role" not in data:
                permissions = current.permissions
            assign_role(user, role, permissions)

        audit("user.updated", "user", user.id, actor_user_id=request.user.id, data={"fields": sorted(data.keys())})

    user = User.objects.select_related("crm_role").get(id=user.id)
    return Response({"user": UserSerializer(user).data})
