"""Port for durable storage of users and roles."""

from typing import Protocol

from identityhub.domain.entities import Role, RoleKind, User


class IdentityStore(Protocol):
    """Identity store contract consumed by the domain services.

    Lookups without the ``_with_roles`` suffix return users whose ``roles``
    is None. The ``_with_roles`` lookups load the user and its role set in
    one consistent read.
    """

    async def find_by_email(self, email: str) -> User | None:
        """Return user by email, roles not loaded."""

    async def find_by_external_id(self, external_id: str) -> User | None:
        """Return user by external ID, roles not loaded."""

    async def find_by_email_with_roles(self, email: str) -> User | None:
        """Return user by email with roles loaded."""

    async def find_by_external_id_with_roles(self, external_id: str) -> User | None:
        """Return user by external ID with roles loaded."""

    async def find_role_by_kind(self, kind: RoleKind) -> Role | None:
        """Return the catalog role of the given kind."""

    async def save(self, user: User) -> User:
        """Insert a new user or update an existing one atomically.

        The persisted version must equal ``user.version`` and is incremented
        by the save. A user whose ``roles`` is None keeps its persisted roles.

        Raises:
            DuplicateIdentityError: If email or external ID is already taken.
            ConcurrentModificationError: If the persisted version differs.
        """

    async def save_role_if_absent(self, role: Role) -> Role:
        """Insert the role unless one of the same kind exists, return the stored role."""
