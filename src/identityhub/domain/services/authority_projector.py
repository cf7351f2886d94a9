"""Projection of role sets into authority strings.

Authorities are the tokens downstream services check for access control,
one ``ROLE_<KIND>`` string per role held.
"""

from collections.abc import Iterable

from identityhub.core.logging import get_logger
from identityhub.domain.entities import Role, RoleKind
from identityhub.domain.ports import IdentityStore

logger = get_logger(__name__)

AUTHORITY_PREFIX = "ROLE_"

# Baseline role first, then increasing privilege.
PROJECTION_ORDER: tuple[RoleKind, ...] = (
    RoleKind.USER,
    RoleKind.MANAGER,
    RoleKind.HR,
    RoleKind.ADMIN,
)

_RANK = {kind: index for index, kind in enumerate(PROJECTION_ORDER)}


def authority_for(kind: RoleKind) -> str:
    """Return the authority string for a role kind."""
    return f"{AUTHORITY_PREFIX}{kind.value}"


def sort_role_kinds(kinds: Iterable[RoleKind]) -> list[RoleKind]:
    """Sort distinct role kinds into projection order."""
    return sorted(set(kinds), key=_RANK.__getitem__)


def project_authorities(roles: Iterable[Role]) -> list[str]:
    """Map a role set to its authority strings.

    The result has one entry per distinct role kind and its order depends
    only on the kinds present, never on the iteration order of ``roles``.

    Args:
        roles: Roles held by a user.

    Returns:
        Authority strings in projection order.
    """
    return [authority_for(kind) for kind in sort_role_kinds(role.kind for role in roles)]


class AuthorityProjector:
    """Resolves users and projects their roles into authorities.

    Lookups fail open to an empty list: a missing user has no privileges,
    which callers treat as a normal answer rather than an error.
    """

    def __init__(self, store: IdentityStore) -> None:
        self.store = store

    async def get_authorities_for_email(self, email: str) -> list[str]:
        user = await self.store.find_by_email_with_roles(email)
        if user is None:
            logger.debug("No user for authority lookup", email=email)
            return []
        return project_authorities(user.roles or ())

    async def get_authorities_for_external_id(self, external_id: str) -> list[str]:
        user = await self.store.find_by_external_id_with_roles(external_id)
        if user is None:
            logger.debug("No user for authority lookup", external_id=external_id)
            return []
        return project_authorities(user.roles or ())
