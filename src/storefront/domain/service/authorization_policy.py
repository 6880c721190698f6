"""Domain service: Authorization Policy.

The single place that decides whether a caller may act. Every mutating
handler calls exactly one of these before it touches storage. All
functions are pure: they either return the (now known to be present)
identity or raise an ``AuthError``.

Roles are compared case-insensitively via ``Role.parse``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from storefront.domain.exceptions import Forbidden, Unauthenticated
from storefront.domain.model.identity import Identity, Role

ANY_ROLE = frozenset(Role)


class Capability(Enum):
    MANAGE_CATALOG = "manage_catalog"
    PLACE_ORDER = "place_order"
    VIEW_OWN_ORDERS = "view_own_orders"
    ADVANCE_ORDER = "advance_order"


CAPABILITY_ROLES: dict[Capability, frozenset[Role]] = {
    Capability.MANAGE_CATALOG: frozenset({Role.ADMIN}),
    Capability.PLACE_ORDER: ANY_ROLE,
    Capability.VIEW_OWN_ORDERS: ANY_ROLE,
    Capability.ADVANCE_ORDER: frozenset({Role.ADMIN, Role.SELLER}),
}


def require_authenticated(identity: Identity | None) -> Identity:
    if identity is None:
        raise Unauthenticated("Not authenticated. Please sign in to continue.")
    return identity


def require_role(identity: Identity | None, allowed_roles: Iterable[Role]) -> Identity:
    identity = require_authenticated(identity)
    allowed = frozenset(allowed_roles)
    if identity.parsed_role not in allowed:
        names = ", ".join(sorted(role.value for role in allowed))
        raise Forbidden(f"Not authorized. One of these roles is required: {names}.")
    return identity


def require_owner_or_admin(
    identity: Identity | None, resource_owner_id: str | None
) -> Identity:
    """A missing resource (owner ``None``) only ever passes for admins."""
    identity = require_authenticated(identity)
    if not identity.is_admin and identity.id != resource_owner_id:
        raise Forbidden("Not authorized. You can only access your own resources.")
    return identity


def authorize(identity: Identity | None, capability: Capability) -> Identity:
    """Gate *identity* on a named capability."""
    return require_role(identity, CAPABILITY_ROLES[capability])
