"""Main CLI entry point for catalog-service management commands."""

import click

from catalog_service.cli.commands import config, database, server
from catalog_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="catalog-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Catalog Service CLI - management commands for the product catalog.

    \b
    Command Groups:
      db         Database initialization
      server     Run the HTTP server
      config     Configuration inspection

    \b
    Quick Start:
      catalog-service db init          # Create tables
      catalog-service server run       # Serve API and web UI
      catalog-service config show      # Inspect effective settings
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(server.server)
cli.add_command(config.config)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
