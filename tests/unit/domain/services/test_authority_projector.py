"""Unit tests for authority projection."""

import pytest

from identityhub.domain.entities import Role, RoleKind
from identityhub.domain.services import AuthorityProjector, project_authorities, sort_role_kinds


def test_project_single_role():
    assert project_authorities([Role(kind=RoleKind.USER)]) == ["ROLE_USER"]


def test_project_empty_role_set():
    assert project_authorities([]) == []


def test_projection_order_is_independent_of_input_order():
    roles = [Role(kind=kind) for kind in RoleKind]
    expected = ["ROLE_USER", "ROLE_MANAGER", "ROLE_HR", "ROLE_ADMIN"]

    assert project_authorities(roles) == expected
    assert project_authorities(reversed(roles)) == expected


def test_projection_of_user_and_admin():
    roles = {Role(kind=RoleKind.ADMIN), Role(kind=RoleKind.USER)}
    assert project_authorities(roles) == ["ROLE_USER", "ROLE_ADMIN"]


def test_sort_role_kinds_removes_duplicates():
    kinds = [RoleKind.HR, RoleKind.USER, RoleKind.HR]
    assert sort_role_kinds(kinds) == [RoleKind.USER, RoleKind.HR]


@pytest.mark.asyncio
async def test_authorities_for_email(mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user(RoleKind.USER, RoleKind.MANAGER)
    projector = AuthorityProjector(mock_store)

    assert await projector.get_authorities_for_email("jane@example.com") == [
        "ROLE_USER",
        "ROLE_MANAGER",
    ]
    mock_store.find_by_email_with_roles.assert_awaited_once_with("jane@example.com")


@pytest.mark.asyncio
async def test_authorities_for_unknown_email_is_empty(mock_store):
    projector = AuthorityProjector(mock_store)
    assert await projector.get_authorities_for_email("nobody@example.com") == []


@pytest.mark.asyncio
async def test_authorities_for_external_id(mock_store, make_user):
    mock_store.find_by_external_id_with_roles.return_value = make_user(RoleKind.ADMIN)
    projector = AuthorityProjector(mock_store)

    assert await projector.get_authorities_for_external_id("g-123") == ["ROLE_ADMIN"]


@pytest.mark.asyncio
async def test_authorities_for_unknown_external_id_is_empty(mock_store):
    projector = AuthorityProjector(mock_store)
    assert await projector.get_authorities_for_external_id("missing") == []


@pytest.mark.asyncio
async def test_authorities_for_user_without_roles(mock_store, make_user):
    mock_store.find_by_email_with_roles.return_value = make_user()
    projector = AuthorityProjector(mock_store)

    assert await projector.get_authorities_for_email("jane@example.com") == []
