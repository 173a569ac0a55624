from django.db.models import Q
from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from crm.audit.utils import audit
from crm.common.pagination import page_params
from crm.iam.permissions import request_principal
from crm.iam.principal import require_permission


class CrmModelViewSet(viewsets.ModelViewSet):
    """
    Shared CRUD wiring for soft-deletable CRM records.

    Subclasses set:
      model, entity_type, permission_prefix ("accounts" -> accounts.view/create/edit/delete),
      serializer_class (read), write_serializer_class (create/update), search_fields.
    """
    permission_classes = [IsAuthenticated]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    model = None
    entity_type = ""
    permission_prefix = ""
    write_serializer_class = None
    search_fields: tuple[str, ...] = ()

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        action = {
            "list": "view",
            "retrieve": "view",
            "create": "create",
            "partial_update": "edit",
            "destroy": "delete",
        }.get(self.action, "view")
        require_permission(request_principal(request), f"{self.permission_prefix}.{action}")

    def base_queryset(self):
        return self.model.objects.filter(deleted_at__isnull=True)

    def get_queryset(self):
        qs = self.base_queryset()
        q = (self.request.query_params.get("q") or "").strip()
        if q and self.search_fields:
            cond = Q()
            for f in self.search_fields:
                cond |= Q(**{f"{f}__icontains": q})
            qs = qs.filter(cond)
        return self.filter_queryset_params(qs).order_by("-created_at")

    def filter_queryset_params(self, qs):
        return qs

    def list(self, request, *args, **kwargs):
        limit, offset = page_params(request)
        qs = self.get_queryset()
        total = qs.count()
        items = qs[offset: offset + limit]
        return Response({
            "items": self.get_serializer(items, many=True).data,
            "page": {"limit": limit, "offset": offset, "total": total},
        })

    def create(self, request, *args, **kwargs):
        s = self.write_serializer_class(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)
        data.setdefault("owner", request.user)
        obj = self.model.objects.create(**data)
        audit(f"{self.entity_type}.created", self.entity_type, obj.id, actor_user_id=request.user.id)
        return Response(self.get_serializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        obj = self.get_object()
        s = self.write_serializer_class(instance=obj, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        for field, value in s.validated_data.items():
            setattr(obj, field, value)
        obj.updated_at = timezone.now()
        obj.save()
        audit(
            f"{self.entity_type}.updated",
            self.entity_type,
            obj.id,
            actor_user_id=request.user.id,
            data={"fields": sorted(s.validated_data.keys())},
        )
        return Response(self.get_serializer(obj).data)

    def destroy(self, request, *args, **kwargs):
        obj = self.get_object()
        obj.soft_delete()
        audit(f"{self.entity_type}.deleted", self.entity_type, obj.id, actor_user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)
