"""CLI command modules."""

from catalog_service.cli.commands import (
    config,
    database,
    server,
)

__all__ = [
    "config",
    "database",
    "server",
]
