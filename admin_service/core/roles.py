"""Admin roles and the declarative route -> required-roles table used by the role guard."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super-admin"
ROLES = (ROLE_ADMIN, ROLE_SUPER_ADMIN)

# Role given to every self-registered or API-created account.
BASE_ROLE = ROLE_ADMIN

# Route keys used with RoleGuard(...) in the routers.
ROUTE_LIST_ADMINS = "admin.list"

# Roles are matched by membership only: "super-admin" does not imply "admin".
# Routes missing from this table are open to any authenticated caller.
ROUTE_ROLES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        ROUTE_LIST_ADMINS: frozenset({ROLE_SUPER_ADMIN}),
    }
)


@dataclass(frozen=True)
class Identity:
    """Subject and role attached to a request by the access guard."""

    id: int
    role: str


def required_roles(route_key: str) -> frozenset[str] | None:
    """Return the roles a route requires, or None if it declares no requirement."""
    return ROUTE_ROLES.get(route_key)


def authorize(identity: Identity | None, required: frozenset[str] | None) -> bool:
    """
    Decide whether an identity may use a route.

    No requirement: allow. Requirement but no identity: deny. Otherwise allow
    iff the identity's role is one of the required roles.
    """
    if required is None:
        return True
    if identity is None:
        return False
    return identity.role in required
