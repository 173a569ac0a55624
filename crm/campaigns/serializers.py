from decimal import Decimal

from rest_framework import serializers

from crm.campaigns.models import Campaign


class CampaignSerializer(serializers.ModelSerializer):
    class Meta:
        model = Campaign
        fields = [
            "id",
            "name",
            "description",
            "channel",
            "status",
            "budget",
            "start_date",
            "end_date",
            "owner_id",
            "created_at",
            "updated_at",
        ]


class CampaignWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Campaign
        fields = ["name", "description", "channel", "status", "budget", "start_date", "end_date", "owner"]
        extra_kwargs = {"owner": {"required": False}}

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_budget(self, value):
        if value is not None and value < Decimal("0"):
            raise serializers.ValidationError("Budget cannot be negative")
        return value

    def validate(self, attrs):
        instance = getattr(self, "instance", None)
        start = attrs.get("start_date", instance.start_date if instance else None)
        end = attrs.get("end_date", instance.end_date if instance else None)
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date must not be before start date"})
        return attrs
