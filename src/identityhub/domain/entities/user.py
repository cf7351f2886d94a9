"""User entity reconciled from external identity claims.

Users are uniquely identified both by email and by the external identity
provider ID. Each user holds a set of roles from the catalog.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from identityhub.domain.entities.role import Role, RoleKind
from identityhub.domain.exceptions import ValidationFailureError


@dataclass(frozen=True)
class User:
    """User entity.

    Attributes:
        email: Email address, unique across users.
        external_id: ID issued by the external identity provider, unique and immutable.
        name: Display name.
        picture: Profile picture URI.
        roles: Roles held by the user, or None when roles were not loaded.
        id: Internal identifier, None until persisted.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
        version: Optimistic locking counter, None until persisted.
    """

    email: str
    external_id: str
    name: str | None = None
    picture: str | None = None
    roles: frozenset[Role] | None = None
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int | None = None

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.email or not self.email.strip():
            raise ValidationFailureError("email", "Email is required")
        if not self.external_id or not self.external_id.strip():
            raise ValidationFailureError("external_id", "External ID is required")

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def role_kinds(self) -> frozenset[RoleKind]:
        """Kinds of the loaded roles.

        Raises:
            ValueError: If roles were not loaded.
        """
        if self.roles is None:
            raise ValueError(f"Roles not loaded for user {self.email}")
        return frozenset(role.kind for role in self.roles)

    def has_role(self, kind: RoleKind) -> bool:
        return kind in self.role_kinds

    def with_profile(self, name: str | None = None, picture: str | None = None) -> "User":
        """Return a copy with the given profile fields applied.

        A field is applied only when it is not None and differs from the
        current value. Returns self when nothing changes.
        """
        changes: dict[str, str] = {}
        if name is not None and name != self.name:
            changes["name"] = name
        if picture is not None and picture != self.picture:
            changes["picture"] = picture
        if not changes:
            return self
        return replace(self, **changes)

    def with_role(self, role: Role) -> "User":
        """Return a copy holding the role, or self if already held."""
        if role.kind in self.role_kinds:
            return self
        return replace(self, roles=self.roles | {role})

    def without_role(self, kind: RoleKind) -> "User":
        """Return a copy without the role kind, or self if not held."""
        if kind not in self.role_kinds:
            return self
        return replace(self, roles=frozenset(r for r in self.roles if r.kind != kind))
