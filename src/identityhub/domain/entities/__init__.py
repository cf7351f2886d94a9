"""Domain entities for IdentityHub.

Entities are plain Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from identityhub.domain.entities.role import Role, RoleKind
from identityhub.domain.entities.user import User

__all__ = [
    "Role",
    "RoleKind",
    "User",
]
