"""Resilience helpers for calls to backing stores."""

from __future__ import annotations

from catalog_service.infra.resilience.timeout import store_call

__all__ = ["store_call"]
