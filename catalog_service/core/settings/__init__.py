"""Modular Pydantic Settings v2 configuration.

One frozen settings class per domain (app, db, cosmos, rabbit, logging,
pagination), each with its own environment prefix and optional YAML/conf.d
source. Import settings via the cached loaders:

    from catalog_service.core.settings import get_app_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables (production)
    4. .env file (development only)
    5. secrets_dir (Kubernetes/Docker secrets)
"""

from __future__ import annotations

from .loader import (
    clear_all_settings_caches,
    get_app_settings,
    get_cosmos_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
    get_rabbit_settings,
)

__all__ = [
    "clear_all_settings_caches",
    "get_app_settings",
    "get_cosmos_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
    "get_rabbit_settings",
]
