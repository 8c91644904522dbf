"""Command-line interface for Inkpress.

This module provides the CLI commands for running and managing
the Inkpress auth service.
"""

import asyncio
from typing import NoReturn

import click

from inkpress import __version__
from inkpress.core.config import get_settings
from inkpress.core.errors import AuthError
from inkpress.core.logging import configure_logging, get_logger
from inkpress.domain.entities import ROLES


@click.group()
@click.version_option(version=__version__, prog_name="Inkpress")
def cli() -> None:
    """Inkpress - blogging backend authentication core.

    Settings are read from INKPRESS_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Auto-reload on code changes (default: on in development)",
)
def serve(host: str | None, port: int | None, reload: bool | None) -> None:
    """Start the Inkpress server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    if reload is None:
        reload = settings.is_development

    configure_logging(settings)
    get_logger(__name__).info(
        "Starting Inkpress server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "inkpress.infrastructure.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the database tables.

    Development and testing only; production uses ``alembic upgrade head``.
    """
    from inkpress.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm("This will create all database tables. Continue?", abort=True)

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


async def _update_account(email: str, action) -> None:
    """Look up an account by email and apply ``action(service, account_id)``."""
    from inkpress.domain.services import AccountService, normalize_email
    from inkpress.infrastructure.persistence.database import get_db_manager
    from inkpress.infrastructure.persistence.repositories import AccountRepository

    db = get_db_manager()
    try:
        async with db.session() as session:
            account = await AccountRepository(session).get_by_email(normalize_email(email))
            if account is None:
                click.echo(f"ERROR: No account with email {email}", err=True)
                raise SystemExit(1)
            try:
                updated = await action(AccountService(session), account.id)
            except AuthError as e:
                click.echo(f"ERROR: {e.message}", err=True)
                raise SystemExit(1) from e
            click.echo(
                f"{updated.email}: role={updated.role} active={updated.is_active}"
            )
    finally:
        await db.disconnect()


@cli.command("set-role")
@click.argument("email")
@click.argument("role", type=click.Choice(sorted(ROLES)))
def set_role(email: str, role: str) -> None:
    """Set the role of the account with EMAIL."""
    configure_logging(get_settings())
    asyncio.run(_update_account(email, lambda svc, account_id: svc.set_role(account_id, role)))


@cli.command()
@click.argument("email")
def deactivate(email: str) -> None:
    """Deactivate the account with EMAIL and revoke its sessions."""
    configure_logging(get_settings())
    asyncio.run(_update_account(email, lambda svc, account_id: svc.set_active(account_id, False)))


@cli.command()
@click.argument("email")
def activate(email: str) -> None:
    """Re-activate the account with EMAIL."""
    configure_logging(get_settings())
    asyncio.run(_update_account(email, lambda svc, account_id: svc.set_active(account_id, True)))


@cli.command()
def info() -> None:
    """Display Inkpress configuration."""
    settings = get_settings()

    click.echo(f"""
Inkpress v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Security:
  Token Life:   {settings.access_token_lifetime}
  Refresh Exp:  {settings.refresh_token_expire_days} days
  Hash Cost:    {settings.password_hash_cost}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `inkpress` command is run
    or when using `python -m inkpress`.
    """
    cli()


if __name__ == "__main__":
    main()
