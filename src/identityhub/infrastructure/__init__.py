"""Infrastructure layer - External dependencies and implementations.

This layer contains the adapters around the domain services:
- Database adapters (SQLAlchemy)
- API routes (FastAPI)

The infrastructure layer implements the ports defined in the domain layer.
"""
