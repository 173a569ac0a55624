from rest_framework import serializers

from crm.leads.models import Lead, LeadEvent, LeadNote


class LeadListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lead
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "company",
            "source",
            "status",
            "owner_id",
            "campaign_id",
            "created_at",
            "updated_at",
        ]


class LeadDetailSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lead
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "company",
            "source",
            "status",
            "owner_id",
            "campaign_id",
            "meta_json",
            "converted_at",
            "created_at",
            "updated_at",
            "deleted_at",
        ]


def _strip(attrs, *names):
    for name in names:
        if name in attrs:
            attrs[name] = (attrs.get(name) or "").strip()


class LeadCreateSerializer(serializers.ModelSerializer):
    meta = serializers.DictField(required=False)

    class Meta:
        model = Lead
        fields = ["name", "email", "phone", "company", "source", "campaign", "owner", "meta"]
        extra_kwargs = {"owner": {"required": False}, "campaign": {"required": False}}

    def validate(self, attrs):
        _strip(attrs, "name", "email", "phone", "company")
        if not attrs.get("name"):
            raise serializers.ValidationError({"name": "Name is required"})
        if not (attrs.get("email") or attrs.get("phone")):
            raise serializers.ValidationError("At least one of email/phone is required")
        if attrs.get("email"):
            attrs["email"] = attrs["email"].lower()
        campaign = attrs.get("campaign")
        if campaign is not None and campaign.deleted_at is not None:
            raise serializers.ValidationError({"campaign": "Campaign not found"})
        attrs["meta_json"] = attrs.pop("meta", None) or {}
        return attrs


class LeadUpdateSerializer(serializers.Serializer):
    # Only allow safe fields to be edited from dashboard; status moves through qualify/convert
    name = serializers.CharField(required=False, max_length=200)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    company = serializers.CharField(required=False, allow_blank=True, max_length=200)
    source = serializers.ChoiceField(required=False, choices=Lead.Source.choices)
    status = serializers.ChoiceField(
        required=False,
        choices=[Lead.Status.NEW, Lead.Status.CONTACTED],
    )
    owner_id = serializers.IntegerField(required=False, allow_null=True)
    meta = serializers.DictField(required=False)

    def validate(self, attrs):
        _strip(attrs, "name", "email", "phone", "company")
        if "name" in attrs and not attrs["name"]:
            raise serializers.ValidationError({"name": "Name cannot be blank"})
        if attrs.get("email"):
            attrs["email"] = attrs["email"].lower()
        if "meta" in attrs and attrs["meta"] is None:
            attrs["meta"] = {}
        return attrs


class LeadQualifySerializer(serializers.Serializer):
    decision = serializers.ChoiceField(choices=[Lead.Status.QUALIFIED, Lead.Status.UNQUALIFIED])
    # validated, never stored
    remarks = serializers.CharField(required=False, allow_blank=True, max_length=1000)


class LeadConvertSerializer(serializers.Serializer):
    account_id = serializers.UUIDField(required=False, allow_null=True)
    create_account = serializers.BooleanField(required=False, default=True)


class LeadEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = LeadEvent
        fields = [
            "id",
            "type",
            "source",
            "actor_user_id",
            "data_json",
            "created_at",
        ]


class LeadNoteSerializer(serializers.ModelSerializer):
    class Meta:
        model = LeadNote
        fields = [
            "id",
            "body",
            "created_by_user_id",
            "updated_by_user_id",
            "created_at",
            "updated_at",
        ]


class LeadNoteWriteSerializer(serializers.Serializer):
    body = serializers.CharField(min_length=1, max_length=5000)
