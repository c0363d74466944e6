"""Role-based authorization decisions, independent of the web framework."""

from collections.abc import Iterable

from pos_backend.models.user import Role
from pos_backend.schemas.auth import CurrentUser

# Route policies for product management.
PRODUCT_WRITE_ROLES = frozenset({Role.ADMIN, Role.MANAGER})
PRODUCT_DELETE_ROLES = frozenset({Role.ADMIN})


def is_authorized(principal: CurrentUser | None, allowed_roles: Iterable[Role] | None = None) -> bool:
    """
    True if principal is authenticated and, when allowed_roles is given, holds one of them.

    An empty or None allowed_roles means "any authenticated user".
    """
    if principal is None:
        return False
    roles = frozenset(Role(r) for r in allowed_roles) if allowed_roles else frozenset()
    if not roles:
        return True
    return Role(principal.role) in roles
