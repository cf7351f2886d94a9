"""IdentityHub - user identity and role membership service.

Reconciles users from externally verified identity claims, manages their
membership in a fixed role catalog, and derives authority strings for
downstream access-control checks.
"""

__version__ = "0.1.0"

from identityhub.infrastructure.api.app import app

__all__ = ["app", "__version__"]
