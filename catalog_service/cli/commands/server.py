"""Server management commands."""

import click
import uvicorn

from catalog_service.cli.utils import info, warning
from catalog_service.core.settings import get_app_settings, get_logging_settings


@click.group(name="server")
def server() -> None:
    """Server management commands."""


@server.command()
@click.option("--host", default=None, help="Host to bind (default: from settings)")
@click.option("--port", default=None, type=int, help="Port to bind (default: from settings)")
@click.option("--reload/--no-reload", default=False, help="Enable auto-reload on code changes")
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (ignored with --reload)",
)
def run(host: str | None, port: int | None, reload: bool, workers: int) -> None:
    """Run the HTTP server (REST API, web UI and event consumer)."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    if reload and workers > 1:
        warning("--reload is incompatible with --workers > 1. Setting workers to 1.")
        workers = 1

    info(f"Server will run at: http://{host}:{port}")
    info(f"Environment: {settings.environment}")

    uvicorn.run(
        "catalog_service.app.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=None if reload else workers,
        log_level=get_logging_settings().level.lower(),
    )
