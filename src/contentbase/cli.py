"""Command-line interface for ContentBase.

This module provides the CLI commands for running the server, preparing
the database and defining collections from a terminal.
"""

import asyncio
import sys
from typing import NoReturn

import click

from contentbase.core.config import get_settings
from contentbase.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="ContentBase")
def cli() -> None:
    """ContentBase - runtime-defined content types.

    Settings are read from CONTENTBASE_* environment variables and .env.
    """


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
    "--reload/--no-reload",
    default=None,
    help="Enable auto-reload (defaults to on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Start the ContentBase server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if reload is None:
        reload = settings.is_development

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting ContentBase server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "contentbase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the system tables and seed default roles.

    Collection tables are not affected.
    """
    from contentbase.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Pass --force to initialize anyway.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create the system tables. Continue?",
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


def parse_column_option(value: str) -> tuple[str, dict[str, str]]:
    """Parse a ``name:type[:constraints]`` column option.

    Raises:
        click.BadParameter: If the name or type part is missing.
    """
    name, _, rest = value.partition(":")
    type_tag, _, constraints = rest.partition(":")
    if not name or not type_tag:
        raise click.BadParameter(
            f"Expected name:type[:constraints], got {value!r}", param_hint="--column"
        )
    spec = {"type": type_tag}
    if constraints:
        spec["constraints"] = constraints
    return name, spec


@cli.command()
@click.argument("table_name")
@click.option(
    "--column",
    "columns",
    multiple=True,
    required=True,
    help="Column as name:type[:constraints], e.g. 'age:integer:DEFAULT 18'. Repeatable.",
)
def create_collection(table_name: str, columns: tuple[str, ...]) -> None:
    """Create a collection table (no-op if it already exists)."""
    from contentbase.application.services import CollectionEngine
    from contentbase.infrastructure.persistence.database import get_db_manager
    from contentbase.infrastructure.persistence.execution_gateway import ExecutionGateway

    settings = get_settings()
    configure_logging(settings)

    schema = dict(parse_column_option(column) for column in columns)

    async def create() -> bool:
        db = get_db_manager()
        try:
            engine = CollectionEngine(
                ExecutionGateway(db.engine),
                max_identifier_length=settings.max_identifier_length,
            )
            result = await engine.create_collection(table_name, schema)
        finally:
            await db.disconnect()

        if not result.success:
            click.echo(f"Error: {result.error}", err=True)
        return result.success

    if not asyncio.run(create()):
        raise SystemExit(1)
    click.echo(f"Collection {table_name!r} is ready.")


@cli.command()
def info() -> None:
    """Display ContentBase configuration."""
    settings = get_settings()

    click.echo(f"""
ContentBase v{settings.app_version}
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

Collections:
  Max Name Len: {settings.max_identifier_length}
  Page Size:    {settings.default_page_size} (max {settings.max_page_size})

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the ``contentbase`` command."""
    cli()


def serve_main() -> NoReturn:
    """Entry point for ``contentbase-serve``."""
    sys.argv[0] = "contentbase"
    if len(sys.argv) == 1:
        sys.argv.append("serve")
    main()


if __name__ == "__main__":
    main()
