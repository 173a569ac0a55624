from django.contrib.auth import get_user_model
from rest_framework import serializers

from crm.iam.constants import ALL_PERMISSIONS, ROLE_CHOICES


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class UserSerializer(serializers.ModelSerializer):
    role = serializers.SerializerMethodField()
    permissions = serializers.SerializerMethodField()

    class Meta:
        model = get_user_model()
        fields = ["id", "email", "first_name", "last_name", "is_active", "role", "permissions"]

    def get_role(self, obj):
        role = getattr(obj, "crm_role", None)
        return role.role if role else None

    def get_permissions(self, obj):
        role = getattr(obj, "crm_role", None)
        return sorted(role.permissions or []) if role else []


def _validate_permissions(value):
    unknown = sorted(set(value) - ALL_PERMISSIONS)
    if unknown:
        raise serializers.ValidationError(f"Unknown permissions: {', '.join(unknown)}")
    return sorted(set(value))


class UserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, trim_whitespace=False)
    first_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    last_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    role = serializers.ChoiceField(choices=ROLE_CHOICES)
    permissions = serializers.ListField(child=serializers.CharField(), required=False)

    def validate_email(self, value):
        value = value.strip().lower()
        if get_user_model().objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists")
        return value

    def validate_permissions(self, value):
        return _validate_permissions(value)


class UserUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    last_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    is_active = serializers.BooleanField(required=False)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False)
    permissions = serializers.ListField(child=serializers.CharField(), required=False)

    def validate_permissions(self, value):
        return _validate_permissions(value)
