from rest_framework.permissions import BasePermission

from crm.iam.principal import Principal, authorize


def request_principal(request) -> Principal | None:
    auth = getattr(request, "auth", None)
    return auth if isinstance(auth, Principal) else None


class HasPermission(BasePermission):
    """
    Usage:
      permission_classes = [IsAuthenticated, HasPermission.with_perms("leads.view")]
    All listed permissions are required.
    """

    required_perms: tuple[str, ...] = tuple()
    message = "You do not have permission to perform this action."

    @classmethod
    def with_perms(cls, *perms: str):
        return type("HasPermissionSub", (cls,), {"required_perms": perms})

    def has_permission(self, request, view):
        principal = request_principal(request)
        return all(authorize(principal, p) for p in self.required_perms)
