import uuid

from crm.common.viewsets import CrmModelViewSet
from crm.contacts.models import Contact
from crm.contacts.serializers import ContactSerializer, ContactWriteSerializer


class ContactViewSet(CrmModelViewSet):
    """
    /v1/contacts/ CRUD. ?account_id= filters the list.
    """
    model = Contact
    entity_type = "contact"
    permission_prefix = "contacts"
    serializer_class = ContactSerializer
    write_serializer_class = ContactWriteSerializer
    search_fields = ("first_name", "last_name", "email", "phone")

    def base_queryset(self):
        return super().base_queryset().select_related("account")

    def filter_queryset_params(self, qs):
        account_id = (self.request.query_params.get("account_id") or "").strip()
        if account_id:
            try:
                qs = qs.filter(account_id=uuid.UUID(account_id))
            except ValueError:
                return qs.none()
        return qs
