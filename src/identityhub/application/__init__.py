"""Application layer: orchestration around the domain services."""
