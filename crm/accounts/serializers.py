from rest_framework import serializers

from crm.accounts.models import Account


class AccountSerializer(serializers.ModelSerializer):
    contacts_count = serializers.SerializerMethodField()

    class Meta:
        model = Account
        fields = [
            "id",
            "name",
            "industry",
            "website",
            "phone",
            "email",
            "city",
            "state",
            "owner_id",
            "contacts_count",
            "created_at",
            "updated_at",
        ]

    def get_contacts_count(self, obj):
        return obj.contacts.filter(deleted_at__isnull=True).count()


class AccountWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ["name", "industry", "website", "phone", "email", "city", "state", "owner"]
        extra_kwargs = {"owner": {"required": False}}

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value
