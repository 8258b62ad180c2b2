#!/usr/bin/env python3
"""
Main CLI entry point for ProjectHub backend server.
"""

import asyncio
import os
import sys
from collections.abc import Callable
from pathlib import Path

import click
import uvicorn
from alembic import command as alembic_command
from alembic.config import Config as AlembicConfig

from projecthub import __version__
from projecthub.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="projecthub")
def cli() -> None:
    """ProjectHub CLI - run the server and manage the database."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--workers", default=1, type=int, help="Number of worker processes (default: 1)"
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the ProjectHub API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info(
        "Starting ProjectHub API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are read at import time, so pass them through the environment
    if log_level == "debug":
        os.environ["PROJECTHUB_DEBUG"] = "true"
        os.environ["PROJECTHUB_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("PROJECTHUB_DEBUG", "false")
        os.environ.setdefault("PROJECTHUB_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "projecthub.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from projecthub.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
def init_db() -> None:
    """Create the projects and challenges tables from the ORM models."""
    from projecthub.database.connection import create_tables, dispose_database

    configure_logging()

    async def do_init():
        try:
            await create_tables()
        finally:
            await dispose_database()

    try:
        asyncio.run(do_init())
        click.echo("✓ Database tables created")
    except Exception as e:
        logger.error("Failed to create tables", error=str(e))
        click.echo(f"✗ Error creating tables: {e}", err=True)
        sys.exit(1)


@cli.command("issue-token")
@click.option("--subject", required=True, help="Subject (user id) to put in the token")
def issue_token(subject: str) -> None:
    """Issue a token for the configured auth provider."""
    from projecthub.auth.factory import get_auth_adapter

    configure_logging()

    try:
        adapter = get_auth_adapter()
        token = asyncio.run(adapter.issue_token(subject=subject))
    except Exception as e:
        logger.error("Failed to issue token", error=str(e))
        click.echo(f"✗ Error issuing token: {e}", err=True)
        sys.exit(1)

    click.echo(token)


def alembic_config(database_url: str | None = None) -> AlembicConfig:
    """Alembic config for the checkout's ``alembic.ini``, optionally retargeted."""
    project_dir = Path(__file__).resolve().parents[2]
    alembic_ini = project_dir / "alembic.ini"
    if not alembic_ini.exists():
        raise click.ClickException(f"alembic.ini not found at {alembic_ini}")

    # stdout is bound per call so command output follows click's streams
    config = AlembicConfig(str(alembic_ini), stdout=sys.stdout)
    config.set_main_option("script_location", str(project_dir / "alembic"))
    if database_url:
        # configparser interpolation; percent-encoded passwords need escaping
        config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def run_alembic(ctx: click.Context, action: str, fn: Callable[..., None], *args: str) -> None:
    config = alembic_config(ctx.obj.get("database_url"))
    try:
        fn(config, *args)
    except Exception as e:
        logger.error("Migration command failed", action=action, error=str(e))
        click.echo(f"✗ {action} failed: {e}", err=True)
        sys.exit(1)


@cli.group()
@click.option(
    "--database-url",
    default=None,
    help="Database to migrate (default: PROJECTHUB_DATABASE_URL or settings)",
)
@click.pass_context
def db(ctx: click.Context, database_url: str | None) -> None:
    """Apply and inspect Alembic migrations for the projects schema."""
    configure_logging()
    ctx.obj = {"database_url": database_url}


@db.command()
@click.argument("revision", default="head")
@click.pass_context
def upgrade(ctx: click.Context, revision: str) -> None:
    """Upgrade the schema to REVISION (default: head)."""
    logger.info("Upgrading database", revision=revision)
    run_alembic(ctx, "upgrade", alembic_command.upgrade, revision)
    click.echo(f"✓ Database at {revision}")


@db.command()
@click.argument("revision", default="-1")
@click.pass_context
def downgrade(ctx: click.Context, revision: str) -> None:
    """Downgrade the schema to REVISION (default: one step back)."""
    logger.info("Downgrading database", revision=revision)
    run_alembic(ctx, "downgrade", alembic_command.downgrade, revision)
    click.echo(f"✓ Database at {revision}")


@db.command()
@click.pass_context
def current(ctx: click.Context) -> None:
    """Show the revision the database is at."""
    run_alembic(ctx, "current", alembic_command.current)


@db.command()
@click.pass_context
def history(ctx: click.Context) -> None:
    """List known migrations."""
    run_alembic(ctx, "history", alembic_command.history)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
