"""Application services for IdentityHub."""

from identityhub.application.services.conflict_retry import retry_on_conflict

__all__ = ["retry_on_conflict"]
