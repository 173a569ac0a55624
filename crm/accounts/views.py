from crm.accounts.models import Account
from crm.accounts.serializers import AccountSerializer, AccountWriteSerializer
from crm.common.viewsets import CrmModelViewSet


class AccountViewSet(CrmModelViewSet):
    """
    /v1/accounts/ CRUD. ?industry= and ?owner_id= filter the list.
    """
    model = Account
    entity_type = "account"
    permission_prefix = "accounts"
    serializer_class = AccountSerializer
    write_serializer_class = AccountWriteSerializer
    search_fields = ("name", "email", "phone", "city")

    def filter_queryset_params(self, qs):
        industry = (self.request.query_params.get("industry") or "").strip()
        if industry:
            qs = qs.filter(industry__iexact=industry)
        owner_id = (self.request.query_params.get("owner_id") or "").strip()
        if owner_id.isdigit():
            qs = qs.filter(owner_id=int(owner_id))
        return qs
