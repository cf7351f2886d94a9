"""FastAPI dependencies wiring the domain services to a request's session."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from identityhub.domain.services import (
    AuthorityProjector,
    ReconciliationEngine,
    RoleMembershipManager,
)
from identityhub.infrastructure.persistence.database import get_db_session
from identityhub.infrastructure.persistence.identity_store import SqlAlchemyIdentityStore


def get_identity_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlAlchemyIdentityStore:
    """Get an identity store bound to the request's session."""
    return SqlAlchemyIdentityStore(session)


Store = Annotated[SqlAlchemyIdentityStore, Depends(get_identity_store)]


def get_reconciliation_engine(store: Store) -> ReconciliationEngine:
    return ReconciliationEngine(store)


def get_role_membership_manager(store: Store) -> RoleMembershipManager:
    return RoleMembershipManager(store)


def get_authority_projector(store: Store) -> AuthorityProjector:
    return AuthorityProjector(store)


Engine = Annotated[ReconciliationEngine, Depends(get_reconciliation_engine)]
MembershipManager = Annotated[RoleMembershipManager, Depends(get_role_membership_manager)]
Projector = Annotated[AuthorityProjector, Depends(get_authority_projector)]
