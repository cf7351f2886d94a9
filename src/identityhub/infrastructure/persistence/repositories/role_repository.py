"""Role repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from identityhub.infrastructure.persistence.models import RoleModel


class RoleRepository:
    """Repository for role database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_name(self, name: str) -> RoleModel | None:
        """Get a role by name.

        Args:
            name: Role name (e.g., 'ADMIN', 'USER').

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel).where(RoleModel.name == name)
        )
        return result.scalar_one_or_none()

    async def get_by_names(self, names: list[str]) -> list[RoleModel]:
        """Get all roles whose name is in the list."""
        if not names:
            return []
        result = await self.session.execute(
            select(RoleModel).where(RoleModel.name.in_(names))
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[RoleModel]:
        """List all roles ordered by ID."""
        result = await self.session.execute(select(RoleModel).order_by(RoleModel.id))
        return list(result.scalars().all())

    async def create(self, role: RoleModel) -> RoleModel:
        """Create a new role.

        Args:
            role: Role model to create.

        Returns:
            Created role model.
        """
        self.session.add(role)
        await self.session.flush()
        return role
