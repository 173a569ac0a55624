from __future__ import annotations

from dataclasses import dataclass, field

from crm.common.errors import Forbidden
from crm.iam.constants import ROLE_SYSTEM_ADMIN


@dataclass(frozen=True)
class Principal:
    user_id: int
    email: str
    role: str
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_system_admin(self) -> bool:
        return self.role == ROLE_SYSTEM_ADMIN

    def as_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "role": self.role,
            "permissions": sorted(self.permissions),
        }


def principal_for_user(user) -> Principal | None:
    role = getattr(user, "crm_role", None)
    if role is None:
        return None
    return Principal(
        user_id=user.id,
        email=user.email or "",
        role=role.role,
        permissions=frozenset(role.permissions or []),
    )


def authorize(principal: Principal | None, permission: str) -> bool:
    """
    system_admin is implicitly allowed everything; every other role needs the flag.
    """
    if principal is None:
        return False
    if principal.is_system_admin:
        return True
    return permission in principal.permissions


def require_permission(principal: Principal | None, permission: str) -> None:
    if not authorize(principal, permission):
        raise Forbidden(details={"required_permission": permission})
