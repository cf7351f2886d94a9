"""Role membership management.

Assigning a role a user already holds and removing a role a user does not
hold are no-ops that return the unchanged record. Every real change goes
through the store's version-checked save, so two writers racing on the same
user cannot silently drop each other's change.
"""

from identityhub.core.logging import get_logger
from identityhub.domain.entities import Role, RoleKind, User
from identityhub.domain.exceptions import NotFoundError
from identityhub.domain.ports import IdentityStore

logger = get_logger(__name__)


class RoleMembershipManager:
    """Applies role assignments and removals to users."""

    def __init__(self, store: IdentityStore) -> None:
        self.store = store

    async def assign_role(self, email: str, role_kind: RoleKind | str) -> User:
        """Assign a role to a user.

        Args:
            email: User's email address.
            role_kind: Role kind or its name.

        Returns:
            The user with its current roles.

        Raises:
            NotFoundError: If the user or the role does not exist.
            ConcurrentModificationError: If the user changed since it was read.
        """
        user, role = await self._load(email, role_kind)

        if user.has_role(role.kind):
            logger.debug("User already has role", email=email, role=role.name)
            return user

        saved = await self.store.save(user.with_role(role))
        logger.info("Assigned role to user", email=email, role=role.name)
        return saved

    async def remove_role(self, email: str, role_kind: RoleKind | str) -> User:
        """Remove a role from a user.

        Removing the last role is allowed and leaves the user without roles.

        Raises:
            NotFoundError: If the user or the role does not exist.
            ConcurrentModificationError: If the user changed since it was read.
        """
        user, role = await self._load(email, role_kind)

        if not user.has_role(role.kind):
            logger.debug("User does not have role", email=email, role=role.name)
            return user

        saved = await self.store.save(user.without_role(role.kind))
        logger.info("Removed role from user", email=email, role=role.name)
        return saved

    async def get_roles(self, email: str) -> frozenset[Role]:
        """Get the roles held by a user.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = await self.store.find_by_email_with_roles(email)
        if user is None:
            raise NotFoundError("user", email)
        return user.roles or frozenset()

    async def _load(self, email: str, role_kind: RoleKind | str) -> tuple[User, Role]:
        user = await self.store.find_by_email_with_roles(email)
        if user is None:
            raise NotFoundError("user", email)

        try:
            kind = RoleKind.parse(role_kind)
        except ValueError:
            raise NotFoundError("role", str(role_kind)) from None

        role = await self.store.find_role_by_kind(kind)
        if role is None:
            raise NotFoundError("role", kind.value)
        return user, role
