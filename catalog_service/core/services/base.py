"""Base service class for business logic."""

from __future__ import annotations

import logging

from catalog_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR
        - self._lazy: Lazy logger for DEBUG (callables evaluated only when enabled)

    Example:
        class ProductService(BaseService):
            def __init__(self, store: ProductStore):
                super().__init__()
                self.store = store

            async def get_active_by_id(self, product_id: int) -> Product:
                self._lazy.debug(lambda: f"Fetching product {product_id}")
                ...
    """

    def __init__(self) -> None:
        """Initialize base service with loggers."""
        class_name = self.__class__.__name__
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)
