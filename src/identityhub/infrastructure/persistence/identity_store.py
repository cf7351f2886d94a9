"""SQLAlchemy implementation of the IdentityStore port.

Translates between domain entities and ORM models, and translates storage
integrity failures into domain errors: unique-constraint violations become
DuplicateIdentityError and version mismatches become
ConcurrentModificationError. Raw SQLAlchemy errors never leave this module
for those two cases.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from identityhub.core.logging import get_logger
from identityhub.domain.entities import Role, RoleKind, User
from identityhub.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateIdentityError,
    NotFoundError,
)
from identityhub.infrastructure.persistence.models import RoleModel, UserModel
from identityhub.infrastructure.persistence.models.user import utcnow
from identityhub.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRepository,
)

logger = get_logger(__name__)


def to_role(model: RoleModel) -> Role:
    """Convert a role model to a domain role."""
    return Role(kind=RoleKind(model.name), id=model.id, description=model.description)


def to_user(model: UserModel, with_roles: bool) -> User:
    """Convert a user model to a domain user.

    Args:
        model: User model.
        with_roles: Whether the roles relationship is loaded on the model.
    """
    roles = frozenset(to_role(role) for role in model.roles) if with_roles else None
    return User(
        id=model.id,
        email=model.email,
        external_id=model.external_id,
        name=model.name,
        picture=model.picture,
        roles=roles,
        created_at=model.created_at,
        updated_at=model.updated_at,
        version=model.version,
    )


class SqlAlchemyIdentityStore:
    """Identity store backed by an async SQLAlchemy session.

    Each successful ``save`` and ``save_role_if_absent`` commits its own
    transaction. Failed writes roll the session back before raising.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the store.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.users = UserRepository(session)
        self.roles = RoleRepository(session)

    async def find_by_email(self, email: str) -> User | None:
        model = await self.users.get_by_email(email)
        return to_user(model, with_roles=False) if model else None

    async def find_by_external_id(self, external_id: str) -> User | None:
        model = await self.users.get_by_external_id(external_id)
        return to_user(model, with_roles=False) if model else None

    async def find_by_email_with_roles(self, email: str) -> User | None:
        model = await self.users.get_by_email_with_roles(email)
        return to_user(model, with_roles=True) if model else None

    async def find_by_external_id_with_roles(self, external_id: str) -> User | None:
        model = await self.users.get_by_external_id_with_roles(external_id)
        return to_user(model, with_roles=True) if model else None

    async def find_role_by_kind(self, kind: RoleKind) -> Role | None:
        model = await self.roles.get_by_name(kind.value)
        return to_role(model) if model else None

    async def list_roles(self) -> list[Role]:
        """List all persisted roles."""
        return [to_role(model) for model in await self.roles.list_all()]

    async def save(self, user: User) -> User:
        """Insert or update a user in its own transaction.

        Args:
            user: User to persist. Inserted when ``user.id`` is None.

        Returns:
            The persisted user with roles loaded.

        Raises:
            DuplicateIdentityError: If the insert hits the email or external ID
                unique constraint.
            ConcurrentModificationError: If the stored version differs from
                ``user.version`` or the row no longer exists.
            NotFoundError: If one of the user's roles is not in the catalog.
        """
        try:
            if user.id is None:
                model = await self._insert(user)
            else:
                model = await self._update(user)
            user_id = model.id
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if user.id is None:
                logger.warning(
                    "Unique constraint violated on user insert",
                    email=user.email,
                    external_id=user.external_id,
                )
                raise DuplicateIdentityError(
                    email=user.email, external_id=user.external_id
                ) from e
            raise ConcurrentModificationError("user", user.email) from e
        except StaleDataError as e:
            await self.session.rollback()
            logger.info("Stale user version at flush", email=user.email, version=user.version)
            raise ConcurrentModificationError("user", user.email) from e
        except (ConcurrentModificationError, NotFoundError):
            await self.session.rollback()
            raise

        saved = await self.users.get_by_id_with_roles(user_id)
        if saved is None:
            raise ConcurrentModificationError("user", user.email)
        return to_user(saved, with_roles=True)

    async def save_role_if_absent(self, role: Role) -> Role:
        """Insert a catalog role unless one of the same kind exists.

        A concurrent insert of the same kind surfaces as a unique-constraint
        violation, which is resolved by returning the row that won.
        """
        existing = await self.roles.get_by_name(role.name)
        if existing is not None:
            return to_role(existing)

        try:
            model = await self.roles.create(
                RoleModel(name=role.name, description=role.description)
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            existing = await self.roles.get_by_name(role.name)
            if existing is None:
                raise
            logger.debug("Role created concurrently", role=role.name)
            return to_role(existing)

        logger.info("Created role", role=role.name)
        return to_role(model)

    async def _role_models(self, user: User) -> list[RoleModel]:
        names = sorted(role.name for role in user.roles or ())
        models = await self.roles.get_by_names(names)
        missing = set(names) - {model.name for model in models}
        if missing:
            raise NotFoundError("role", ", ".join(sorted(missing)))
        return models

    async def _insert(self, user: User) -> UserModel:
        now = utcnow()
        model = UserModel(
            email=user.email,
            external_id=user.external_id,
            name=user.name,
            picture=user.picture,
            created_at=now,
            updated_at=now,
            roles=await self._role_models(user),
        )
        return await self.users.create(model)

    async def _update(self, user: User) -> UserModel:
        model = await self.users.get_by_id_with_roles(user.id)
        if model is None or model.version != user.version:
            raise ConcurrentModificationError("user", user.email)

        model.name = user.name
        model.picture = user.picture
        if user.roles is not None:
            wanted = {role.name for role in user.roles}
            if wanted != set(model.role_names):
                model.roles = await self._role_models(user)
        # Always touch the row so the version guard runs even for role-only changes
        model.updated_at = utcnow()

        self.session.add(model)
        await self.session.flush()
        return model
