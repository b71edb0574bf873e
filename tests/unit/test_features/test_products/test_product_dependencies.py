"""Tests for read-store selection in the products dependency providers."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from catalog_service.core.settings import get_rabbit_settings
from catalog_service.features.products import dependencies
from catalog_service.features.products.documents import CosmosProductStore


@pytest.fixture
def connected_documents(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    client = MagicMock()
    monkeypatch.setattr(dependencies, "get_document_client", lambda: client)
    return client


def test_no_document_client_means_relational_listings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(dependencies, "get_document_client", lambda: None)

    assert dependencies.get_read_store() is None


def test_documents_serve_listings_when_events_sync_them(
    connected_documents, monkeypatch: pytest.MonkeyPatch,
):
    monkeypatch.setenv("RABBIT_ENABLED", "true")
    get_rabbit_settings.cache_clear()

    assert isinstance(dependencies.get_read_store(), CosmosProductStore)


def test_unsynced_documents_are_not_used_for_listings(connected_documents):
    assert get_rabbit_settings().is_configured is False

    assert dependencies.get_read_store() is None
