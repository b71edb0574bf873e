"""Document store settings for Azure Cosmos DB (NoSQL API).

Environment variables use COSMOS_ prefix.
Example: COSMOS_ENABLED=true, COSMOS_ENDPOINT=https://acct.documents.azure.com:443/
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_cosmos_yaml_source


class CosmosSettings(BaseSettings):
    """Cosmos DB connection and container settings.

    When enabled, the document store serves paginated catalog reads and is
    kept in sync by the product change-event consumer.
    """

    enabled: bool = Field(
        default=False,
        description="Enable the Cosmos DB document store.",
    )
    endpoint: str | None = Field(
        default=None,
        description="Cosmos DB account endpoint URL.",
    )
    key: SecretStr | None = Field(
        default=None,
        description="Cosmos DB account key.",
    )
    database: str = Field(
        default="catalog",
        min_length=1,
        max_length=255,
        description="Database name (created on connect if missing).",
    )
    container: str = Field(
        default="products",
        min_length=1,
        max_length=255,
        description="Container holding product documents.",
    )
    partition_key_path: str = Field(
        default="/id",
        pattern=r"^/.+$",
        description="Partition key path for the products container.",
    )
    startup_require_cosmos: bool = Field(
        default=False,
        description="Fail startup when Cosmos DB is unreachable.",
    )

    model_config = SettingsConfigDict(
        env_prefix="COSMOS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_cosmos_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @property
    def is_configured(self) -> bool:
        """Check if the document store is enabled with credentials."""
        return self.enabled and bool(self.endpoint and self.key)
