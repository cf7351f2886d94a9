"""SQLAlchemy models for the IdentityHub tables.

All models inherit from the Base class defined in database.py.
"""

from identityhub.infrastructure.persistence.models.role import RoleModel
from identityhub.infrastructure.persistence.models.user import UserModel
from identityhub.infrastructure.persistence.models.user_roles import UserRolesModel

__all__ = [
    "RoleModel",
    "UserModel",
    "UserRolesModel",
]
