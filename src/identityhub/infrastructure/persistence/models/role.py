"""SQLAlchemy model for the roles table.

One row per role kind. The unique constraint on name resolves concurrent
catalog seeding.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from identityhub.infrastructure.persistence.database import Base


class RoleModel(Base):
    """SQLAlchemy model for the roles table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique role kind name (ADMIN, HR, MANAGER, USER).
        description: Description of the role's purpose.
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Role kind name (e.g., 'ADMIN', 'USER')",
    )
    description: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        comment="Description of the role's purpose",
    )

    # Relationships
    users: Mapped[list["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        secondary="user_roles",
        back_populates="roles",
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"
