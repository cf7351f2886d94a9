"""SQLAlchemy model for the users table.

Users are unique by email and by external identity provider ID. The version
column is SQLAlchemy's version counter, so every UPDATE is guarded by the
version the row was loaded with.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from identityhub.infrastructure.persistence.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Auto-incrementing primary key.
        external_id: External identity provider ID, stored in google_id.
        email: User's email address.
        name: Display name.
        picture: Profile picture URI.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
        version: Optimistic locking counter.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    external_id: Mapped[str] = mapped_column(
        "google_id",
        String(100),
        nullable=False,
        unique=True,
        comment="External identity provider user ID (JWT 'sub' claim)",
    )
    email: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="User email address",
    )
    name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Full name",
    )
    picture: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Profile picture URL",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Optimistic locking version",
    )

    # Relationships
    roles: Mapped[list["RoleModel"]] = relationship(  # noqa: F821
        "RoleModel",
        secondary="user_roles",
        back_populates="users",
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("idx_user_email", "email"),
        Index("idx_user_google_id", "google_id"),
    )

    @property
    def role_names(self) -> list[str]:
        """Get the names of the user's roles.

        Note: This requires the 'roles' relationship to be loaded.
        """
        return [role.name for role in self.roles]

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, version={self.version})>"
