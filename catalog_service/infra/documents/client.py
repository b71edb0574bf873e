"""Azure Cosmos DB client for the product read model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.cosmos.aio import CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from catalog_service.core.settings import get_cosmos_settings

if TYPE_CHECKING:
    from azure.cosmos.aio import ContainerProxy, DatabaseProxy

    from catalog_service.core.settings.cosmos import CosmosSettings

logger = logging.getLogger(__name__)


class DocumentClient:
    """Async Cosmos DB client with connection management.

    Uses the NoSQL API. Supports the async context manager pattern for
    resource cleanup.
    """

    def __init__(
        self,
        endpoint: str,
        key: str,
        database_name: str,
        container_name: str,
        partition_key_path: str = "/id",
    ) -> None:
        self._endpoint = endpoint
        self._key = key
        self._database_name = database_name
        self._container_name = container_name
        self._partition_key_path = partition_key_path

        self._client: CosmosClient | None = None
        self._database: DatabaseProxy | None = None
        self._container: ContainerProxy | None = None

    @classmethod
    def from_settings(cls, settings: CosmosSettings) -> DocumentClient:
        if not settings.is_configured or settings.endpoint is None or settings.key is None:
            msg = "Cosmos DB is not configured (COSMOS_ENABLED, COSMOS_ENDPOINT, COSMOS_KEY)"
            raise RuntimeError(msg)
        return cls(
            endpoint=settings.endpoint,
            key=settings.key.get_secret_value(),
            database_name=settings.database,
            container_name=settings.container,
            partition_key_path=settings.partition_key_path,
        )

    @property
    def is_connected(self) -> bool:
        return self._container is not None

    async def connect(self) -> None:
        """Establish connection and ensure database/container exist."""
        self._client = CosmosClient(url=self._endpoint, credential=self._key)
        await self._client.__aenter__()

        try:
            self._database = self._client.get_database_client(self._database_name)
            await self._database.read()
        except CosmosResourceNotFoundError:
            self._database = await self._client.create_database(self._database_name)

        try:
            self._container = self._database.get_container_client(self._container_name)
            await self._container.read()
        except CosmosResourceNotFoundError:
            self._container = await self._database.create_container(
                id=self._container_name,
                partition_key={"paths": [self._partition_key_path], "kind": "Hash"},
            )

        logger.info(
            "Cosmos DB container ready",
            extra={"database": self._database_name, "container": self._container_name},
        )

    async def close(self) -> None:
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None
            self._container = None

    async def __aenter__(self) -> DocumentClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> bool:
        await self.close()
        return False

    def _require_container(self) -> ContainerProxy:
        if self._container is None:
            msg = "Cosmos DB client not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._container

    async def upsert_item(self, item: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace an item. ``item`` must carry its ``id``."""
        result = await self._require_container().upsert_item(body=item)
        return dict(result)

    async def query_items(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[Any]:
        """Run a parameterized query across partitions.

        Args:
            query: Cosmos SQL query string.
            parameters: ``[{"name": "@param", "value": value}, ...]``.

        Returns:
            Matching items, or bare values for ``SELECT VALUE`` queries.
        """
        container = self._require_container()
        return [
            item
            async for item in container.query_items(query=query, parameters=parameters)
        ]


# ──────────────────────────────────────────────────────────────────────────────
# Process-wide client lifecycle
# ──────────────────────────────────────────────────────────────────────────────

_client: DocumentClient | None = None


async def start_documents() -> DocumentClient | None:
    """Connect the shared client when Cosmos DB is configured."""
    global _client

    settings = get_cosmos_settings()
    if not settings.is_configured:
        logger.info("Cosmos DB not configured - reads served by the relational store")
        return None

    client = DocumentClient.from_settings(settings)
    await client.connect()
    _client = client
    return client


async def stop_documents() -> None:
    global _client

    if _client is None:
        return
    try:
        await _client.close()
        logger.info("Cosmos DB client closed")
    except Exception as e:
        logger.warning("Error closing Cosmos DB client", extra={"error": str(e)})
    finally:
        _client = None


def get_document_client() -> DocumentClient | None:
    """Return the connected shared client, or None when unavailable."""
    if _client is not None and _client.is_connected:
        return _client
    return None


__all__ = [
    "DocumentClient",
    "get_document_client",
    "start_documents",
    "stop_documents",
]
