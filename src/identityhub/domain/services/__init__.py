"""Domain services for IdentityHub.

Services hold the identity reconciliation and role membership rules. They
depend only on the IdentityStore port, never on a concrete database.
"""

from identityhub.domain.services.authority_projector import (
    AuthorityProjector,
    project_authorities,
    sort_role_kinds,
)
from identityhub.domain.services.reconciliation_engine import ReconciliationEngine
from identityhub.domain.services.role_catalog import RoleCatalog
from identityhub.domain.services.role_membership_manager import RoleMembershipManager

__all__ = [
    "AuthorityProjector",
    "ReconciliationEngine",
    "RoleCatalog",
    "RoleMembershipManager",
    "project_authorities",
    "sort_role_kinds",
]
