"""API schemas for IdentityHub."""

from identityhub.infrastructure.api.schemas.users_schemas import (
    AuthoritiesResponse,
    CreateUserRequest,
    RoleAssignmentRequest,
    UpdateUserRequest,
    UserResponse,
)

__all__ = [
    "AuthoritiesResponse",
    "CreateUserRequest",
    "RoleAssignmentRequest",
    "UpdateUserRequest",
    "UserResponse",
]
