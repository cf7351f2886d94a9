"""Persistence repositories for database operations."""

from identityhub.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from identityhub.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "RoleRepository",
    "UserRepository",
]
