"""Domain event base class.

Domain events record something meaningful that happened in the catalog and
travel over the message broker to other components (the document store
projection, for one).

Key features:
- Event versioning for schema evolution
- Correlation IDs for distributed tracing
- Automatic timestamp and ID generation
- Message headers generation for RabbitMQ publishing
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from catalog_service.core.settings import get_app_settings


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Subclasses must define:
    - event_type: ClassVar[str] - Unique event type identifier (e.g., "product.changed")
    - event_version: ClassVar[int] - Schema version for evolution (default: 1)

    Example:
        class ProductChangedEvent(DomainEvent):
            event_type: ClassVar[str] = "product.changed"

            product_id: int
            name: str

    Attributes:
        event_id: Unique identifier for this event instance.
        timestamp: When the event occurred (UTC).
        correlation_id: ID linking related events across services.
        service: Name of the service that generated the event.
        metadata: Additional context.
    """

    event_type: ClassVar[str] = "domain.event"
    event_version: ClassVar[int] = 1

    event_id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique event identifier",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Event timestamp in UTC",
    )
    correlation_id: str | None = Field(
        default=None,
        description="Correlation ID for distributed tracing",
    )
    service: str = Field(
        default_factory=lambda: get_app_settings().service_name,
        description="Service that generated the event",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event metadata",
    )

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Validate concrete subclasses define their event type."""
        super().__init_subclass__(**kwargs)
        if cls.event_type == "domain.event":
            msg = f"{cls.__name__} must define 'event_type' class variable"
            raise TypeError(msg)

    @property
    def routing_key(self) -> str:
        """Topic exchange routing key; the event type."""
        return self.event_type

    @property
    def message_key(self) -> str:
        """Key identifying the aggregate this event is about."""
        return self.event_id

    def headers(self) -> dict[str, Any]:
        """Generate message headers for RabbitMQ publishing.

        Returns:
            Dictionary of header key-value pairs.

        Example:
            event.headers()
            # {
            #     "x-event-type": "product.changed",
            #     "x-event-version": "1",
            #     "x-event-id": "0b6f...",
            #     "x-service": "catalog-service",
            #     "x-timestamp": "2026-01-01T00:00:00+00:00",
            # }
        """
        headers: dict[str, Any] = {
            "x-event-type": self.event_type,
            "x-event-version": str(self.event_version),
            "x-event-id": self.event_id,
            "x-service": self.service,
            "x-timestamp": self.timestamp.isoformat(),
        }
        if self.correlation_id:
            headers["x-correlation-id"] = self.correlation_id
        return headers

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(event_id={self.event_id!r})"
