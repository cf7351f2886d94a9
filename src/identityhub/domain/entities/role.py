"""Role entity for authorization.

Roles form a closed catalog of four kinds. They are seeded once at startup
and are read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum


class RoleKind(str, Enum):
    """The fixed set of role kinds."""

    ADMIN = "ADMIN"
    HR = "HR"
    MANAGER = "MANAGER"
    USER = "USER"

    @classmethod
    def parse(cls, value: "RoleKind | str") -> "RoleKind":
        """Resolve a role kind from a member or its name (case-insensitive).

        Raises:
            ValueError: If the name is not a known role kind.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown role kind: {value}") from None


@dataclass(frozen=True)
class Role:
    """Role entity.

    Two roles are equal when they have the same kind, so a set of roles
    holds at most one entry per kind regardless of how each was loaded.

    Attributes:
        kind: The role kind.
        id: Database identifier, None until persisted.
        description: Human-readable description of the role.
    """

    kind: RoleKind
    id: int | None = field(default=None, compare=False)
    description: str | None = field(default=None, compare=False)

    @property
    def name(self) -> str:
        """Canonical role name as stored in the roles table."""
        return self.kind.value
