"""Health check endpoint.

``GET /health`` always answers 200 with ``status: "ok"`` while the process
serves requests; the ``checks`` map reports each backing service so a
degraded dependency is visible without failing liveness probes.
"""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import APIRouter
from pydantic import BaseModel, Field
from sqlalchemy import text

from catalog_service.core.settings import get_app_settings
from catalog_service.infra.database import get_engine
from catalog_service.infra.documents import get_document_client
from catalog_service.infra.messaging import get_broker, is_broker_running

router = APIRouter(tags=["health"])

logger = logging.getLogger(__name__)

CHECK_TIMEOUT = 2.0


class ComponentHealth(BaseModel):
    status: str = Field(description="ok, down or disabled")
    latency_ms: float | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    version: str
    checks: dict[str, ComponentHealth] = Field(default_factory=dict)


async def check_database() -> ComponentHealth:
    """Run ``SELECT 1`` against the relational store under a short timeout."""
    start_time = time.perf_counter()
    try:
        async with asyncio.timeout(CHECK_TIMEOUT):
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
    except TimeoutError:
        logger.warning("Database health check timed out", extra={"timeout": CHECK_TIMEOUT})
        return ComponentHealth(status="down", message=f"Timeout after {CHECK_TIMEOUT}s")
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return ComponentHealth(status="down", message=type(e).__name__)

    latency_ms = (time.perf_counter() - start_time) * 1000
    return ComponentHealth(status="ok", latency_ms=round(latency_ms, 2))


def check_documents() -> ComponentHealth:
    if get_document_client() is None:
        return ComponentHealth(status="disabled")
    return ComponentHealth(status="ok")


def check_messaging() -> ComponentHealth:
    if get_broker() is None:
        return ComponentHealth(status="disabled")
    return ComponentHealth(status="ok" if is_broker_running() else "down")


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health() -> HealthResponse:
    settings = get_app_settings()
    return HealthResponse(
        service=settings.service_name,
        version=settings.version,
        checks={
            "database": await check_database(),
            "documents": check_documents(),
            "messaging": check_messaging(),
        },
    )


__all__ = ["router"]
