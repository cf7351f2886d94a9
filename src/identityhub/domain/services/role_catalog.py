"""Role catalog seeding.

The catalog is the closed set of role kinds with their canonical
descriptions. Seeding runs once at process start with the store passed in
explicitly and is safe to repeat or to run from several instances at once.
"""

from identityhub.core.logging import get_logger
from identityhub.domain.entities import Role, RoleKind
from identityhub.domain.ports import IdentityStore

logger = get_logger(__name__)


class RoleCatalog:
    """The fixed role catalog."""

    DEFAULT_KIND = RoleKind.USER

    DESCRIPTIONS: dict[RoleKind, str] = {
        RoleKind.ADMIN: "Administrator with full system access",
        RoleKind.HR: "Human Resources with employee management access",
        RoleKind.MANAGER: "Manager with department management access",
        RoleKind.USER: "Regular user with basic access",
    }

    @classmethod
    def description_for(cls, kind: RoleKind) -> str:
        """Return the canonical description of a role kind."""
        return cls.DESCRIPTIONS[kind]

    @classmethod
    def roles(cls) -> list[Role]:
        """Return unsaved catalog roles in declaration order."""
        return [Role(kind=kind, description=cls.description_for(kind)) for kind in RoleKind]

    @classmethod
    async def seed(cls, store: IdentityStore) -> list[Role]:
        """Ensure one persisted role exists per role kind.

        Args:
            store: Identity store to seed.

        Returns:
            The persisted roles in declaration order.
        """
        logger.info("Initializing default roles")
        seeded = []
        for role in cls.roles():
            stored = await store.save_role_if_absent(role)
            seeded.append(stored)
        logger.info("Role initialization completed", roles=[role.name for role in seeded])
        return seeded
