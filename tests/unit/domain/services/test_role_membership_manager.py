"""Unit tests for RoleMembershipManager."""

import pytest

from identityhub.domain.entities import RoleKind
from identityhub.domain.exceptions import ConcurrentModificationError, NotFoundError
from identityhub.domain.services import RoleMembershipManager


@pytest.fixture
def manager(mock_store):
    return RoleMembershipManager(mock_store)


@pytest.mark.asyncio
async def test_assign_role(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER, version=0)

    user = await manager.assign_role("jane@example.com", RoleKind.ADMIN)

    assert user.role_kinds == {RoleKind.USER, RoleKind.ADMIN}
    assert user.version == 1
    mock_store.find_role_by_kind.assert_awaited_once_with(RoleKind.ADMIN)


@pytest.mark.asyncio
async def test_assign_role_accepts_name(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER)

    user = await manager.assign_role("jane@example.com", "manager")

    assert user.has_role(RoleKind.MANAGER)


@pytest.mark.asyncio
async def test_assign_held_role_is_noop(manager, mock_store, make_user):
    existing = make_user(RoleKind.USER, RoleKind.ADMIN, version=5)
    mock_store.find_by_email_with_roles.return_value = existing

    user = await manager.assign_role("jane@example.com", RoleKind.ADMIN)

    assert user is existing
    mock_store.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_assign_role_unknown_user(manager, mock_store):
    with pytest.raises(NotFoundError) as exc_info:
        await manager.assign_role("nobody@example.com", RoleKind.ADMIN)

    assert exc_info.value.entity_kind == "user"
    mock_store.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_assign_role_unknown_role_name(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER)

    with pytest.raises(NotFoundError) as exc_info:
        await manager.assign_role("jane@example.com", "SUPERUSER")

    assert exc_info.value.entity_kind == "role"
    assert exc_info.value.key == "SUPERUSER"


@pytest.mark.asyncio
async def test_assign_role_missing_from_store(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER)
    mock_store.find_role_by_kind.side_effect = None
    mock_store.find_role_by_kind.return_value = None

    with pytest.raises(NotFoundError) as exc_info:
        await manager.assign_role("jane@example.com", RoleKind.HR)

    assert exc_info.value.entity_kind == "role"
    assert exc_info.value.key == "HR"


@pytest.mark.asyncio
async def test_assign_role_propagates_conflict(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER)
    mock_store.save.side_effect = ConcurrentModificationError("user", "jane@example.com")

    with pytest.raises(ConcurrentModificationError):
        await manager.assign_role("jane@example.com", RoleKind.HR)

    mock_store.save.assert_awaited_once()


@pytest.mark.asyncio
async def test_remove_role(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER, RoleKind.HR)

    user = await manager.remove_role("jane@example.com", RoleKind.HR)

    assert user.role_kinds == {RoleKind.USER}


@pytest.mark.asyncio
async def test_remove_role_not_held_is_noop(manager, mock_store, make_user):
    existing = make_user(RoleKind.USER)
    mock_store.find_by_email_with_roles.return_value = existing

    user = await manager.remove_role("jane@example.com", "HR")

    assert user is existing
    mock_store.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_remove_last_role_is_allowed(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER)

    user = await manager.remove_role("jane@example.com", RoleKind.USER)

    assert user.roles == frozenset()


@pytest.mark.asyncio
async def test_get_roles(manager, mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER, RoleKind.HR)

    roles = await manager.get_roles("jane@example.com")

    assert {role.kind for role in roles} == {RoleKind.USER, RoleKind.HR}


@pytest.mark.asyncio
async def test_get_roles_unknown_user(manager):
    with pytest.raises(NotFoundError):
        await manager.get_roles("nobody@example.com")
