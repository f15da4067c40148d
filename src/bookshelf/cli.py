#!/usr/bin/env python3
"""
Main CLI entry point for the Bookshelf API server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from bookshelf import __version__
from bookshelf.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="bookshelf")
def cli() -> None:
    """Bookshelf CLI - run the server and prepare the database."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: from settings)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: from settings)")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Log level (default: from settings)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str | None) -> None:
    """Start the Bookshelf API server."""
    from bookshelf.config import settings

    if log_level is not None:
        settings.log_level = log_level.upper()
        # Reload workers build their own settings from the environment
        os.environ["BOOKSHELF_LOG_LEVEL"] = settings.log_level

    configure_logging(settings.log_level, debug=settings.debug)

    host = host or settings.api_host
    port = port or settings.api_port

    logger.info(
        "Starting Bookshelf API server",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level,
    )

    try:
        uvicorn.run(
            "bookshelf.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload or settings.api_reload,
            log_level=settings.log_level.lower(),
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
@click.option("--database-url", default=None, help="Database URL (default: from settings)")
def init_db(database_url: str | None) -> None:
    """Create the database tables if they do not exist."""
    from bookshelf.config import settings
    from bookshelf.database.connection import create_engine, create_schema

    configure_logging(settings.log_level, debug=settings.debug)

    async def do_init():
        engine = create_engine(database_url)
        try:
            await create_schema(engine)
        finally:
            await engine.dispose()

    try:
        asyncio.run(do_init())
    except Exception as e:
        logger.error("Failed to create tables", error=str(e))
        click.echo(f"✗ Error creating tables: {e}", err=True)
        sys.exit(1)

    click.echo("✓ Database tables ready")


@cli.command()
@click.option("--database-url", default=None, help="Database URL (default: from settings)")
def seed(database_url: str | None) -> None:
    """Seed the store with sample books."""
    from bookshelf.config import settings
    from bookshelf.database.seed_data import seed_books
    from bookshelf.store import create_store

    configure_logging(settings.log_level, debug=settings.debug)

    async def do_seed():
        store = create_store(settings, database_url=database_url)
        try:
            return await seed_books(store)
        finally:
            await store.close()

    try:
        books = asyncio.run(do_seed())
    except Exception as e:
        logger.error("Failed to seed database", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Seeded {len(books)} book(s)")
    for book in books:
        click.echo(f"  {book.book_id}: {book.title}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
