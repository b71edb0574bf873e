"""Database management commands.

Example:bash
    # Verify connectivity and create missing tables
    catalog-service db init
"""

import sys

import click

from catalog_service.cli.utils import coro, error, info, success
from catalog_service.core.settings import get_db_settings


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify database connectivity and create the catalog tables."""
    from catalog_service.infra.database import close_database, init_database

    settings = get_db_settings()
    if settings.is_configured:
        info(f"Connecting to: {settings.host}:{settings.port}/{settings.name}")
    else:
        info(f"PostgreSQL not configured, using {settings.sqlite_url}")

    try:
        await init_database(create_schema=True)
        success("Database initialized successfully!")
    except Exception as e:
        error(f"Failed to initialize database: {e}")
        sys.exit(1)
    finally:
        await close_database()
