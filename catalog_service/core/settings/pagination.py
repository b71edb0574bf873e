"""Pagination settings for catalog listings.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=20, PAGINATION_MAX_LIMIT=100
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size used when the request omits a limit or
            supplies one that cannot be honoured.
        max_limit: Largest page size a client may request.
    """

    default_limit: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Default page size when limit not specified or invalid",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Maximum allowed page size (hard limit)",
    )

    @model_validator(mode="after")
    def _default_within_max(self) -> PaginationSettings:
        if self.default_limit > self.max_limit:
            msg = "default_limit cannot exceed max_limit"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
