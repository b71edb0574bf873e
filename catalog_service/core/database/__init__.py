"""Relational model foundation."""

from __future__ import annotations

from .base import NAMING_CONVENTION, Base

__all__ = ["NAMING_CONVENTION", "Base"]
