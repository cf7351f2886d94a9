"""Pydantic schemas for the users API.

These schemas validate identity claims and role requests coming from the
authentication gateway and shape user records for responses.
"""

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from identityhub.domain.entities import RoleKind, User
from identityhub.domain.services import sort_role_kinds


class CreateUserRequest(BaseModel):
    """Identity claim used by create and create-or-update.

    The claim has already been verified by the caller with the external
    identity provider.
    """

    email: str = Field(..., max_length=100, description="User's email address")
    external_id: str = Field(
        ...,
        alias="googleId",
        min_length=1,
        max_length=100,
        description="External identity provider user ID",
    )
    name: str | None = Field(None, max_length=100, description="Full name")
    picture: str | None = Field(None, max_length=500, description="Profile picture URL")

    model_config = {"populate_by_name": True}

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        """Check the address is well formed and return it as sent, unnormalized."""
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from None
        return v


class UpdateUserRequest(BaseModel):
    """Request schema for updating a user's profile.

    Only provided fields that differ from the stored values are written.
    """

    name: str | None = Field(None, max_length=100, description="Full name")
    picture: str | None = Field(None, max_length=500, description="Profile picture URL")


class RoleAssignmentRequest(BaseModel):
    """Request schema for assigning a role to a user."""

    role_name: RoleKind = Field(..., alias="roleName", description="Role to assign")

    model_config = {"populate_by_name": True}


class UserResponse(BaseModel):
    """Response schema for a single user with its roles."""

    id: int = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    external_id: str = Field(..., description="External identity provider user ID")
    name: str | None = Field(None, description="Full name")
    picture: str | None = Field(None, description="Profile picture URL")
    roles: list[str] = Field(default_factory=list, description="Role names")
    created_at: datetime | None = Field(None, description="When the user was created")
    updated_at: datetime | None = Field(None, description="When the user was last updated")
    version: int | None = Field(None, description="Optimistic locking version")

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        """Build a response from a domain user."""
        kinds = sort_role_kinds(role.kind for role in user.roles or ())
        return cls(
            id=user.id,
            email=user.email,
            external_id=user.external_id,
            name=user.name,
            picture=user.picture,
            roles=[kind.value for kind in kinds],
            created_at=user.created_at,
            updated_at=user.updated_at,
            version=user.version,
        )


class AuthoritiesResponse(BaseModel):
    """Authorities derived from a user's roles, possibly empty."""

    authorities: list[str] = Field(default_factory=list, description="Authority strings")
