"""Command-line interface for IdentityHub.

This module provides the CLI commands for running and managing
the IdentityHub service.
"""

import asyncio
from typing import NoReturn

import click

from identityhub.core.config import get_settings
from identityhub.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="IdentityHub")
def cli() -> None:
    """IdentityHub - user identity and role membership service."""


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the IdentityHub server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.is_sqlite:
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting IdentityHub server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "identityhub.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates the tables (development and testing only) and seeds the role
    catalog. Seeding is idempotent and safe to repeat.
    """
    from identityhub.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if not force:
        click.confirm(
            "This will create the database tables and seed the role catalog. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option(
    "--stored",
    is_flag=True,
    help="List the roles persisted in the database instead of the catalog",
)
def roles(stored: bool) -> None:
    """List the role catalog."""
    from identityhub.domain.services import RoleCatalog, project_authorities

    if not stored:
        for role in RoleCatalog.roles():
            authority = project_authorities([role])[0]
            click.echo(f"{role.name:<8} {authority:<13} {role.description}")
        return

    from identityhub.infrastructure.persistence.database import get_db_manager
    from identityhub.infrastructure.persistence.identity_store import (
        SqlAlchemyIdentityStore,
    )

    async def list_stored() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                stored_roles = await SqlAlchemyIdentityStore(session).list_roles()
        finally:
            await db.disconnect()

        if not stored_roles:
            click.echo("No roles stored. Run 'identityhub init-db' first.", err=True)
            raise SystemExit(1)
        for role in stored_roles:
            click.echo(f"{role.id:<4} {role.name:<8} {role.description}")

    asyncio.run(list_stored())


@cli.command()
def info() -> None:
    """Display IdentityHub configuration."""
    settings = get_settings()

    click.echo(f"""
IdentityHub v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Roles:
  Seed on start:   {settings.seed_roles_on_startup}
  Retry attempts:  {settings.conflict_retry_attempts}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
