"""Ports the domain services depend on."""

from identityhub.domain.ports.identity_store import IdentityStore

__all__ = ["IdentityStore"]
