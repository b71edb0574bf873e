"""Domain events and their publisher."""

from __future__ import annotations

from .base import DomainEvent
from .publisher import EventPublisher

__all__ = ["DomainEvent", "EventPublisher"]
