from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from crm.common.errors import NotFound
from crm.common.pagination import page_params, paginated
from crm.iam.constants import SUBDEALERS_VIEW
from crm.iam.permissions import HasPermission
from crm.subdealers import services
from crm.subdealers.models import Subdealer
from crm.subdealers.serializers import (
    FetchGstSerializer,
    GenerateOtpSerializer,
    SubdealerSerializer,
    VerifyOtpSerializer,
    gst_details_from_payload,
)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def fetch_gst(request):
    """
    POST /v1/subdealer/fetch-gst
    Body: { "gstNumber": "27AABCU9603R1ZM" }
    Response 200: { "success": true, "data": { GstDetails } }
    """
    s = FetchGstSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    details = services.fetch_gst(s.validated_data["gstNumber"])
    return Response({"success": True, "data": details.as_dict()})


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def generate_otp(request):
    """
    POST /v1/subdealer/generate-otp
    Body: { "phone": "9876543210" }
    """
    s = GenerateOtpSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    services.request_otp(s.validated_data["phone"])
    return Response({"success": True, "message": "OTP sent successfully"})


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def verify_otp(request):
    """
    POST /v1/subdealer/verify-otp
    Body: { "phone": "...", "otp": "123456", "gstDetails": { ... } }
    Response 201: { "success": true, "message": "...", "data": { id, phone, gstNumber, legalName } }
    """
    s = VerifyOtpSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    subdealer = services.verify_and_register(
        phone=s.validated_data["phone"],
        otp=s.validated_data["otp"],
        gst_details=gst_details_from_payload(s.validated_data.get("gstDetails")),
    )
    return Response(
        {
            "success": True,
            "message": "Phone verified and subdealer registered",
            "data": {
                "id": str(subdealer.id),
                "phone": subdealer.phone,
                "gstNumber": subdealer.gst_number,
                "legalName": subdealer.legal_name,
            },
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticated, HasPermission.with_perms(SUBDEALERS_VIEW)])
def subdealers_list(request):
    """
    GET /v1/subdealers
    Query: q (phone / GST / legal name), state, limit, offset
    """
    limit, offset = page_params(request)
    qs = Subdealer.objects.all().order_by("-created_at")

    q = (request.query_params.get("q") or "").strip()
    if q:
        qs = qs.filter(Q(phone__icontains=q) | Q(gst_number__icontains=q) | Q(legal_name__icontains=q))

    state = (request.query_params.get("state") or "").strip()
    if state:
        qs = qs.filter(address_state__iexact=state)

    return Response(paginated(qs, SubdealerSerializer, limit=limit, offset=offset))


@api_view(["GET"])
@permission_classes([IsAuthenticated, HasPermission.with_perms(SUBDEALERS_VIEW)])
def subdealers_detail(request, subdealer_id):
    subdealer = Subdealer.objects.filter(id=subdealer_id).first()
    if not subdealer:
        raise NotFound("Subdealer not found")
    return Response({"subdealer": SubdealerSerializer(subdealer).data})
