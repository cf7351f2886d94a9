"""Reconciliation of external identity claims into user records.

An identity claim is the (email, external ID, name, picture) tuple an
authentication gateway presents after it has verified the user with an
external identity provider. The engine decides whether a claim creates a
new user, updates the profile of an existing one, or changes nothing.
"""

from identityhub.core.logging import get_logger
from identityhub.domain.entities import User
from identityhub.domain.exceptions import (
    DuplicateIdentityError,
    NotFoundError,
    RoleCatalogUninitializedError,
    ValidationFailureError,
)
from identityhub.domain.ports import IdentityStore
from identityhub.domain.services.role_catalog import RoleCatalog

logger = get_logger(__name__)


def _require(field: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationFailureError(field, f"{field} is required")
    return value


class ReconciliationEngine:
    """Creates and updates users from identity claims."""

    def __init__(self, store: IdentityStore) -> None:
        """Initialize the engine.

        Args:
            store: Identity store used for lookups and saves.
        """
        self.store = store

    async def create_user(
        self,
        email: str,
        external_id: str,
        name: str | None = None,
        picture: str | None = None,
    ) -> User:
        """Create a new user holding the default role.

        Args:
            email: User's email address.
            external_id: ID issued by the external identity provider.
            name: Display name.
            picture: Profile picture URI.

        Returns:
            The persisted user with roles loaded.

        Raises:
            DuplicateIdentityError: If a user with the email or external ID exists,
                including when a concurrent creator wins the insert.
            RoleCatalogUninitializedError: If the default role was never seeded.
        """
        _require("email", email)
        _require("external_id", external_id)
        logger.info("Creating new user with default role", email=email)

        existing = await self._find_existing(email, external_id)
        if existing is not None:
            logger.warning("User already exists", email=email, external_id=external_id)
            raise DuplicateIdentityError(email=email, external_id=external_id)

        return await self._insert(email, external_id, name, picture)

    async def update_profile(
        self,
        email: str,
        name: str | None = None,
        picture: str | None = None,
    ) -> User:
        """Update the mutable profile fields of a user.

        Fields that are None or equal to the stored value are left alone.
        When nothing changes the stored record is returned without a write.

        Raises:
            NotFoundError: If no user has the email.
            ConcurrentModificationError: If the user changed since it was read.
        """
        _require("email", email)
        user = await self.store.find_by_email_with_roles(email)
        if user is None:
            raise NotFoundError("user", email)
        return await self._apply_profile(user, name, picture)

    async def reconcile(
        self,
        email: str,
        external_id: str,
        name: str | None = None,
        picture: str | None = None,
    ) -> User:
        """Create the user if absent, otherwise update its profile.

        Repeating the call with the same claim leaves the stored record and
        its version unchanged. If a concurrent caller inserts the same
        identity first, this call falls back to updating that record.
        """
        _require("email", email)
        _require("external_id", external_id)

        existing = await self._find_existing(email, external_id)
        if existing is not None:
            return await self._apply_profile(existing, name, picture)

        try:
            return await self._insert(email, external_id, name, picture)
        except DuplicateIdentityError:
            logger.info("Lost user creation race, updating instead", email=email)
            existing = await self._find_existing(email, external_id)
            if existing is None:
                raise
            return await self._apply_profile(existing, name, picture)

    async def get_user_by_email(self, email: str) -> User:
        """Get a user and its roles by email.

        Raises:
            NotFoundError: If no user has the email.
        """
        user = await self.store.find_by_email_with_roles(email)
        if user is None:
            raise NotFoundError("user", email)
        return user

    async def get_user_by_external_id(self, external_id: str) -> User:
        """Get a user and its roles by external ID.

        Raises:
            NotFoundError: If no user has the external ID.
        """
        user = await self.store.find_by_external_id_with_roles(external_id)
        if user is None:
            raise NotFoundError("user", external_id)
        return user

    async def _find_existing(self, email: str, external_id: str) -> User | None:
        user = await self.store.find_by_email_with_roles(email)
        if user is None:
            user = await self.store.find_by_external_id_with_roles(external_id)
        return user

    async def _insert(
        self,
        email: str,
        external_id: str,
        name: str | None,
        picture: str | None,
    ) -> User:
        default_role = await self.store.find_role_by_kind(RoleCatalog.DEFAULT_KIND)
        if default_role is None:
            raise RoleCatalogUninitializedError(RoleCatalog.DEFAULT_KIND.value)

        user = User(
            email=email,
            external_id=external_id,
            name=name,
            picture=picture,
            roles=frozenset({default_role}),
        )
        created = await self.store.save(user)
        logger.info("User created", email=email, user_id=created.id)
        return created

    async def _apply_profile(
        self,
        user: User,
        name: str | None,
        picture: str | None,
    ) -> User:
        updated = user.with_profile(name=name, picture=picture)
        if updated is user:
            return user
        logger.info("Updating user info", email=user.email)
        return await self.store.save(updated)
