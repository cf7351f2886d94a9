"""Domain layer: entities, errors, ports and services."""
