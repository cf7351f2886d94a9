"""API Routes for IdentityHub."""

from identityhub.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "users_router",
]
