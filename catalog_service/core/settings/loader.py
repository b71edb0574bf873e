"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process.

Usage:
    from catalog_service.core.settings.loader import get_app_settings

    settings = get_app_settings()

Testing:
    Clear the cache to force reload after changing the environment:
    get_app_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .cosmos import CosmosSettings
from .logs import LoggingSettings
from .pagination import PaginationSettings
from .postgres import PostgresSettings
from .rabbit import RabbitSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> PostgresSettings:
    """Get cached relational store settings.

    Returns:
        Validated and frozen PostgresSettings instance.
    """
    return PostgresSettings()


@lru_cache(maxsize=1)
def get_cosmos_settings() -> CosmosSettings:
    """Get cached document store settings.

    Returns:
        Validated and frozen CosmosSettings instance.
    """
    return CosmosSettings()


@lru_cache(maxsize=1)
def get_rabbit_settings() -> RabbitSettings:
    """Get cached RabbitMQ settings.

    Returns:
        Validated and frozen RabbitSettings instance.
    """
    return RabbitSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


def clear_all_settings_caches() -> None:
    """Drop every cached settings instance (used by tests and the CLI)."""
    for loader in (
        get_app_settings,
        get_db_settings,
        get_cosmos_settings,
        get_rabbit_settings,
        get_logging_settings,
        get_pagination_settings,
    ):
        loader.cache_clear()
