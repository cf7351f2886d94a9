"""Tests for SqlAlchemyIdentityStore against in-memory SQLite."""

import pytest
from sqlalchemy import func, select

from identityhub.domain.entities import Role, RoleKind, User
from identityhub.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateIdentityError,
    NotFoundError,
)
from identityhub.domain.services import RoleCatalog
from identityhub.infrastructure.persistence.identity_store import SqlAlchemyIdentityStore
from identityhub.infrastructure.persistence.models import RoleModel


async def _create(store: SqlAlchemyIdentityStore, email="jane@example.com", external_id="g-123"):
    user_role = await store.find_role_by_kind(RoleKind.USER)
    return await store.save(
        User(email=email, external_id=external_id, name="Jane", roles=frozenset({user_role}))
    )


@pytest.mark.asyncio
async def test_catalog_is_seeded(store):
    roles = await store.list_roles()

    assert {role.kind for role in roles} == set(RoleKind)
    assert all(role.id is not None for role in roles)
    admin = await store.find_role_by_kind(RoleKind.ADMIN)
    assert admin.description == RoleCatalog.description_for(RoleKind.ADMIN)


@pytest.mark.asyncio
async def test_seed_is_idempotent(store, db_session):
    first = await store.list_roles()
    again = await RoleCatalog.seed(store)

    count = await db_session.scalar(select(func.count()).select_from(RoleModel))
    assert count == len(RoleKind)
    assert {role.id for role in again} == {role.id for role in first}


@pytest.mark.asyncio
async def test_insert_assigns_id_version_and_timestamps(store):
    user = await _create(store)

    assert user.id is not None
    assert user.version is not None
    assert user.created_at is not None
    assert user.updated_at is not None
    assert user.role_kinds == {RoleKind.USER}


@pytest.mark.asyncio
async def test_find_without_roles_leaves_roles_unloaded(store):
    await _create(store)

    by_email = await store.find_by_email("jane@example.com")
    by_external_id = await store.find_by_external_id("g-123")

    assert by_email.roles is None
    assert by_external_id.id == by_email.id


@pytest.mark.asyncio
async def test_find_unknown_returns_none(store):
    assert await store.find_by_email("nobody@example.com") is None
    assert await store.find_by_external_id_with_roles("missing") is None


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(store):
    await _create(store)

    with pytest.raises(DuplicateIdentityError):
        await _create(store, external_id="g-other")

    # The session stays usable after the failed insert
    assert await store.find_by_email("jane@example.com") is not None


@pytest.mark.asyncio
async def test_duplicate_external_id_is_rejected(store):
    await _create(store)

    with pytest.raises(DuplicateIdentityError):
        await _create(store, email="other@example.com")


@pytest.mark.asyncio
async def test_update_bumps_version(store):
    created = await _create(store)

    updated = await store.save(created.with_profile(name="Jane Doe"))

    assert updated.name == "Jane Doe"
    assert updated.version > created.version
    assert updated.created_at == created.created_at


@pytest.mark.asyncio
async def test_role_only_change_bumps_version(store):
    created = await _create(store)
    admin = await store.find_role_by_kind(RoleKind.ADMIN)

    updated = await store.save(created.with_role(admin))

    assert updated.role_kinds == {RoleKind.USER, RoleKind.ADMIN}
    assert updated.version > created.version


@pytest.mark.asyncio
async def test_stale_save_is_rejected(store):
    created = await _create(store)
    await store.save(created.with_profile(name="First"))

    with pytest.raises(ConcurrentModificationError):
        await store.save(created.with_profile(name="Second"))

    current = await store.find_by_email_with_roles("jane@example.com")
    assert current.name == "First"


@pytest.mark.asyncio
async def test_save_of_deleted_user_is_rejected(store):
    ghost = User(
        email="ghost@example.com",
        external_id="g-ghost",
        roles=frozenset(),
        id=999,
        version=0,
    )

    with pytest.raises(ConcurrentModificationError):
        await store.save(ghost)


@pytest.mark.asyncio
async def test_save_with_unseeded_role_is_rejected(session_factory, db_session):
    async with session_factory() as session:
        await session.execute(RoleModel.__table__.delete().where(RoleModel.name == "HR"))
        await session.commit()

    store = SqlAlchemyIdentityStore(db_session)
    created = await _create(store)

    with pytest.raises(NotFoundError) as exc_info:
        await store.save(created.with_role(Role(kind=RoleKind.HR)))

    assert exc_info.value.entity_kind == "role"
