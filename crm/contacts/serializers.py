from rest_framework import serializers

from crm.contacts.models import Contact


class ContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contact
        fields = [
            "id",
            "first_name",
            "last_name",
            "full_name",
            "email",
            "phone",
            "title",
            "account_id",
            "source_lead_id",
            "owner_id",
            "created_at",
            "updated_at",
        ]


class ContactWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contact
        fields = ["first_name", "last_name", "email", "phone", "title", "account", "owner"]
        extra_kwargs = {"owner": {"required": False}}

    def validate_first_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("First name is required")
        return value

    def validate_email(self, value):
        return (value or "").strip().lower()

    def validate_account(self, value):
        if value is not None and value.deleted_at is not None:
            raise serializers.ValidationError("Account not found")
        return value

    def validate(self, attrs):
        instance = getattr(self, "instance", None)
        email = attrs.get("email", instance.email if instance else "")
        phone = attrs.get("phone", instance.phone if instance else "")
        if not (email or phone):
            raise serializers.ValidationError("At least one of email/phone is required")
        return attrs
