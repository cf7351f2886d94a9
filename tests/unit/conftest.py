"""Pytest configuration for unit tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from identityhub.domain.entities import Role, RoleKind, User
from identityhub.domain.ports import IdentityStore
from identityhub.domain.services import RoleCatalog

ROLE_IDS = {RoleKind.ADMIN: 1, RoleKind.HR: 2, RoleKind.MANAGER: 3, RoleKind.USER: 4}


def stored_role(kind: RoleKind) -> Role:
    """Build a role as the store would return it."""
    return Role(kind=kind, id=ROLE_IDS[kind], description=RoleCatalog.description_for(kind))


def stored_user(*kinds: RoleKind, version: int = 0, **fields) -> User:
    """Build a persisted user holding the given role kinds."""
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    values = {
        "email": "jane@example.com",
        "external_id": "g-123",
        "name": "Jane",
        "picture": "https://img.example.com/jane.png",
        "roles": frozenset(stored_role(kind) for kind in kinds),
        "id": 1,
        "created_at": now,
        "updated_at": now,
        "version": version,
    }
    values.update(fields)
    return User(**values)


async def _persist(user: User) -> User:
    """Mimic the store's save: assign an id and bump the version."""
    version = 0 if user.version is None else user.version + 1
    return User(
        email=user.email,
        external_id=user.external_id,
        name=user.name,
        picture=user.picture,
        roles=user.roles,
        id=user.id or 1,
        created_at=user.created_at,
        updated_at=user.updated_at,
        version=version,
    )


async def _find_role(kind: RoleKind) -> Role:
    return stored_role(kind)


@pytest.fixture
def mock_store() -> AsyncMock:
    """Mock identity store with a seeded catalog and no users."""
    store = AsyncMock(spec=IdentityStore)
    store.find_by_email.return_value = None
    store.find_by_external_id.return_value = None
    store.find_by_email_with_roles.return_value = None
    store.find_by_external_id_with_roles.return_value = None
    store.find_role_by_kind.side_effect = _find_role
    store.save.side_effect = _persist
    return store


@pytest.fixture
def make_role():
    return stored_role


@pytest.fixture
def make_user():
    return stored_user
