"""Persistence adapters: database session management, models and the identity store."""

from identityhub.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)
from identityhub.infrastructure.persistence.identity_store import SqlAlchemyIdentityStore

__all__ = [
    "Base",
    "DatabaseManager",
    "SqlAlchemyIdentityStore",
    "close_database",
    "get_db_manager",
    "get_db_session",
    "init_database",
]
