"""Errors raised by the identity and role-membership core.

The hierarchy is closed: every error carries an ErrorKind tag and callers
dispatch on the exception class (or its kind), never on message text.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Tags for the errors raised by the core."""

    NOT_FOUND = "not_found"
    DUPLICATE_IDENTITY = "duplicate_identity"
    ROLE_CATALOG_UNINITIALIZED = "role_catalog_uninitialized"
    CONCURRENT_MODIFICATION = "concurrent_modification"
    VALIDATION_FAILURE = "validation_failure"


class IdentityError(Exception):
    """Base class for all identity core errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(IdentityError):
    """Raised when a user or role does not exist.

    Attributes:
        entity_kind: 'user' or 'role'.
        key: The lookup key that found nothing (email, external ID or role name).
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_kind: str, key: str) -> None:
        self.entity_kind = entity_kind
        self.key = key
        super().__init__(f"{entity_kind.capitalize()} not found: {key}")


class DuplicateIdentityError(IdentityError):
    """Raised when a user with the same email or external ID already exists."""

    kind = ErrorKind.DUPLICATE_IDENTITY

    def __init__(self, email: str | None = None, external_id: str | None = None) -> None:
        self.email = email
        self.external_id = external_id
        super().__init__(f"User already exists: {email or external_id}")


class RoleCatalogUninitializedError(IdentityError):
    """Raised when the default role is missing from the store.

    This means the role catalog was never seeded, which is a startup
    invariant violation rather than a normal runtime condition.
    """

    kind = ErrorKind.ROLE_CATALOG_UNINITIALIZED

    def __init__(self, role_name: str) -> None:
        self.role_name = role_name
        super().__init__(
            f"Default {role_name} role not found. Please initialize roles."
        )


class ConcurrentModificationError(IdentityError):
    """Raised when a save targets a stale version of a record.

    The caller may retry the whole read-modify-write cycle.
    """

    kind = ErrorKind.CONCURRENT_MODIFICATION

    def __init__(self, entity_kind: str, key: str) -> None:
        self.entity_kind = entity_kind
        self.key = key
        super().__init__(f"{entity_kind.capitalize()} was modified concurrently: {key}")


class ValidationFailureError(IdentityError, ValueError):
    """Raised when an input field is missing or malformed."""

    kind = ErrorKind.VALIDATION_FAILURE

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Invalid value for field: {field}")
