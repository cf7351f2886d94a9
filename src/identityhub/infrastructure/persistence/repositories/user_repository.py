"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from identityhub.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations.

    Lookups ending in ``_with_roles`` load the role set in the same call and
    refresh any instance already in the session's identity map, so callers
    never see a role set left over from an earlier read.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email without roles."""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.email == email)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_external_id(self, external_id: str) -> UserModel | None:
        """Get a user by external identity provider ID without roles."""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.external_id == external_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_id_with_roles(self, user_id: int) -> UserModel | None:
        """Get a user by ID with roles eagerly loaded."""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .options(selectinload(UserModel.roles))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email_with_roles(self, email: str) -> UserModel | None:
        """Get a user by email with roles eagerly loaded.

        Args:
            email: User's email address.

        Returns:
            User model with roles if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.email == email)
            .options(selectinload(UserModel.roles))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_external_id_with_roles(self, external_id: str) -> UserModel | None:
        """Get a user by external ID with roles eagerly loaded.

        Args:
            external_id: External identity provider user ID.

        Returns:
            User model with roles if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.external_id == external_id)
            .options(selectinload(UserModel.roles))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
