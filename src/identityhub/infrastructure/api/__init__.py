"""HTTP API for IdentityHub built on FastAPI."""
