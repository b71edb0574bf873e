"""Configuration management commands."""

import json
from typing import Any

import click
import yaml

from catalog_service.cli.utils import header, warning
from catalog_service.core.settings import (
    get_app_settings,
    get_cosmos_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
    get_rabbit_settings,
)

SECRET_FIELDS = frozenset({"password", "key", "dsn", "amqp_uri"})


def _section(settings: Any, show_secrets: bool) -> dict[str, Any]:
    values = settings.model_dump(mode="json")
    if show_secrets:
        for field in SECRET_FIELDS & values.keys():
            secret = getattr(settings, field)
            if secret is not None and hasattr(secret, "get_secret_value"):
                values[field] = secret.get_secret_value()
    else:
        for field in SECRET_FIELDS & values.keys():
            if values[field] is not None:
                values[field] = "***"
        values.pop("url", None)
    return values


@click.group(name="config")
def config() -> None:
    """Configuration management commands."""


@config.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml", "table"]),
    default="table",
    help="Output format",
)
@click.option(
    "--show-secrets/--hide-secrets",
    default=False,
    help="Show sensitive values (passwords, keys)",
)
def show(output_format: str, show_secrets: bool) -> None:
    """Display current configuration settings."""
    config_dict = {
        "app": _section(get_app_settings(), show_secrets),
        "database": _section(get_db_settings(), show_secrets),
        "cosmos": _section(get_cosmos_settings(), show_secrets),
        "rabbit": _section(get_rabbit_settings(), show_secrets),
        "logging": _section(get_logging_settings(), show_secrets),
        "pagination": _section(get_pagination_settings(), show_secrets),
    }

    if not show_secrets:
        warning("Secrets are hidden. Use --show-secrets to display them.")

    if output_format == "json":
        click.echo(json.dumps(config_dict, indent=2, default=str))
    elif output_format == "yaml":
        click.echo(yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False))
    else:
        for section, values in config_dict.items():
            header(f"[{section.upper()}]")
            for key, value in values.items():
                click.echo(f"  {key:30} = {value}")
