from rest_framework import serializers

from crm.subdealers.gst import GstAddress, GstDetails
from crm.subdealers.models import Subdealer


# Request bodies accept any string: rate limits are keyed on the raw value
# and format checks happen afterwards in the service layer.

class FetchGstSerializer(serializers.Serializer):
    gstNumber = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)


class GenerateOtpSerializer(serializers.Serializer):
    phone = serializers.CharField(required=False, allow_blank=True, default="", max_length=32)


class GstAddressSerializer(serializers.Serializer):
    building = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    street = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    locality = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    district = serializers.CharField(required=False, allow_blank=True, default="", max_length=128)
    state = serializers.CharField(required=False, allow_blank=True, default="", max_length=128)
    pincode = serializers.CharField(required=False, allow_blank=True, default="", max_length=10)


class GstDetailsSerializer(serializers.Serializer):
    gstNumber = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)
    legalName = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    tradeName = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    address = GstAddressSerializer(required=False)
    registrationDate = serializers.CharField(required=False, allow_blank=True, default="", max_length=32)
    businessType = serializers.CharField(required=False, allow_blank=True, default="", max_length=128)
    status = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)
    jurisdiction = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    pan = serializers.CharField(required=False, allow_blank=True, default="", max_length=10)


def gst_details_from_payload(data) -> GstDetails | None:
    if not data:
        return None
    address = data.get("address") or {}
    return GstDetails(
        gst_number=data.get("gstNumber", ""),
        legal_name=(data.get("legalName") or "").strip(),
        trade_name=(data.get("tradeName") or "").strip(),
        address=GstAddress(**{k: (v or "").strip() for k, v in address.items()}),
        registration_date=data.get("registrationDate", ""),
        business_type=data.get("businessType", ""),
        status=data.get("status", ""),
        jurisdiction=data.get("jurisdiction", ""),
        pan=data.get("pan", ""),
    )


class VerifyOtpSerializer(serializers.Serializer):
    phone = serializers.CharField(required=False, allow_blank=True, default="", max_length=32)
    otp = serializers.CharField(required=False, allow_blank=True, default="", max_length=16)
    gstDetails = GstDetailsSerializer(required=False, allow_null=True)


class SubdealerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subdealer
        fields = [
            "id",
            "phone",
            "gst_number",
            "legal_name",
            "trade_name",
            "address_building",
            "address_street",
            "address_locality",
            "address_district",
            "address_state",
            "address_pincode",
            "pan",
            "business_type",
            "status",
            "jurisdiction",
            "registration_date",
            "phone_verified",
            "verified_at",
            "created_at",
            "updated_at",
        ]
