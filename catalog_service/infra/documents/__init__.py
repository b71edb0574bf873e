"""Document store (Azure Cosmos DB) infrastructure."""

from __future__ import annotations

from .client import DocumentClient, get_document_client, start_documents, stop_documents

__all__ = ["DocumentClient", "get_document_client", "start_documents", "stop_documents"]
