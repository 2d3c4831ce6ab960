"""Domain entities for the acting user and the role/permission matrix."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Role hierarchy: Owner > Admin > Operator > Viewer. Customers sit outside it."""

    OWNER = "Owner"
    ADMIN = "Admin"
    OPERATOR = "Operator"
    VIEWER = "Viewer"
    CUSTOMER = "Customer"

    @classmethod
    def parse(cls, raw: str | None) -> "Role":
        """Resolve a role name; unknown or missing roles default to Viewer."""
        if raw:
            for role in cls:
                if role.value.lower() == raw.strip().lower():
                    return role
        return cls.VIEWER


ELEVATED_ROLES = (Role.OWNER, Role.ADMIN)

_SCOPES = ("inventory", "orders", "shipments", "suppliers", "purchase_orders", "customers")
_FULL_ACCESS = frozenset(
    f"{scope}:{action}"
    for scope in _SCOPES
    for action in ("read", "create", "update", "delete")
) | {"purchase_orders:approve", "purchase_orders:receive"}
_READ_ONLY = frozenset(f"{scope}:read" for scope in _SCOPES)

ROLE_PERMISSIONS: dict[Role, frozenset[str]] = {
    Role.OWNER: _FULL_ACCESS | {"users:manage_admins", "system:settings"},
    Role.ADMIN: _FULL_ACCESS,
    Role.OPERATOR: _READ_ONLY,
    Role.VIEWER: _READ_ONLY,
    Role.CUSTOMER: frozenset(),
}


def has_permission(role: Role, permission: str) -> bool:
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


@dataclass(frozen=True)
class CurrentUser:
    """The caller on whose behalf the list core acts.

    Capability checks take the permission scope of the collection
    (``inventory``, ``purchase_orders``, ...) and whether the collection
    is scoped to records the caller created.
    """

    id: str
    email: str | None = None
    name: str | None = None
    role: Role = Role.VIEWER

    @property
    def is_customer(self) -> bool:
        return self.role == Role.CUSTOMER

    @property
    def is_elevated(self) -> bool:
        return self.role in ELEVATED_ROLES

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.id

    @property
    def owner_key(self) -> str:
        """Value stamped into ``created_by`` and matched exactly for owner scoping."""
        return self.email or self.id

    def can_read(self, scope: str, owner_scoped: bool = False) -> bool:
        if self.is_customer:
            return owner_scoped
        return has_permission(self.role, f"{scope}:read")

    def can_create(self, scope: str, owner_scoped: bool = False) -> bool:
        # Customers may place their own records in owner-scoped collections.
        if self.is_customer:
            return owner_scoped
        return has_permission(self.role, f"{scope}:create")

    def can_edit(self, scope: str) -> bool:
        return not self.is_customer and has_permission(self.role, f"{scope}:update")

    def can_delete(self, scope: str) -> bool:
        return not self.is_customer and has_permission(self.role, f"{scope}:delete")

    def can_permanently_delete(self, scope: str) -> bool:
        return self.is_elevated and has_permission(self.role, f"{scope}:delete")
